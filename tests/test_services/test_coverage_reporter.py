import unittest
from datetime import date, time

from shift.models import ShiftAssignment, ShiftStatus
from gate_coverage.reporter import coverage_rate, shift_coverage_stats
from gate_coverage.schemas import CoverageStatus, CoverageView


def view(code, status):
    return CoverageView(gate=code, gate_name=code, status=status)


def make_shift(id, status, shift_date=date(2026, 3, 14)):
    return ShiftAssignment(
        id=id, org_id=1, staff_id=id, staff_name="x", gate_location="main_gate",
        shift_date=shift_date, shift_start_time=time(9), shift_end_time=time(17), status=status,
    )


class CoverageRateTests(unittest.TestCase):
    def test_one_of_two_gates_covered(self):
        summary = coverage_rate([view("main_gate", CoverageStatus.active), view("side_gate", CoverageStatus.vacant)])
        self.assertEqual(summary.covered_gates, 1)
        self.assertEqual(summary.total_gates, 2)
        self.assertEqual(summary.rate, 0.5)

    def test_scheduled_gate_is_not_covered(self):
        summary = coverage_rate([view("main_gate", CoverageStatus.scheduled)])
        self.assertEqual(summary.rate, 0.0)

    def test_no_gates_means_zero(self):
        summary = coverage_rate([])
        self.assertEqual((summary.covered_gates, summary.total_gates, summary.rate), (0, 0, 0.0))

    def test_rate_stays_within_bounds(self):
        statuses = list(CoverageStatus)
        for n in range(1, 7):
            views = [view(f"g{i}", statuses[i % len(statuses)]) for i in range(n)]
            summary = coverage_rate(views)
            self.assertLessEqual(summary.covered_gates, summary.total_gates)
            self.assertGreaterEqual(summary.rate, 0.0)
            self.assertLessEqual(summary.rate, 1.0)


class ShiftCoverageStatsTests(unittest.TestCase):
    def test_counts_covered_and_gaps(self):
        shifts = [
            make_shift(1, ShiftStatus.completed),
            make_shift(2, ShiftStatus.active),
            make_shift(3, ShiftStatus.missed),
            make_shift(4, ShiftStatus.scheduled),
            make_shift(5, ShiftStatus.cancelled),
            make_shift(6, ShiftStatus.completed, shift_date=date(2026, 4, 1)),
        ]
        stats = shift_coverage_stats(shifts, start_date=date(2026, 3, 1), end_date=date(2026, 3, 31))
        self.assertEqual(stats.total_shifts, 4)
        self.assertEqual(stats.covered_shifts, 2)
        self.assertEqual(stats.gaps_detected, 1)
        self.assertEqual(stats.coverage_rate, 0.5)

    def test_empty_range(self):
        stats = shift_coverage_stats([], start_date=date(2026, 3, 1), end_date=date(2026, 3, 1))
        self.assertEqual(stats.total_shifts, 0)
        self.assertEqual(stats.coverage_rate, 0.0)


if __name__ == "__main__":
    unittest.main()
