import unittest
from datetime import date, time

from shift.conflict import overlaps, conflicting_shifts
from shift.models import ShiftAssignment, ShiftStatus

DAY = date(2026, 3, 14)


def make_shift(id, start, end, staff_id=1, status=ShiftStatus.scheduled, shift_date=DAY):
    return ShiftAssignment(
        id=id,
        org_id=1,
        staff_id=staff_id,
        staff_name="x",
        gate_location="main_gate",
        shift_date=shift_date,
        shift_start_time=start,
        shift_end_time=end,
        status=status,
    )


class OverlapTests(unittest.TestCase):
    def test_touching_windows_do_not_overlap(self):
        self.assertFalse(overlaps(time(9), time(12), time(12), time(17)))
        self.assertFalse(overlaps(time(12), time(17), time(9), time(12)))

    def test_partial_and_nested_overlap(self):
        self.assertTrue(overlaps(time(9), time(13), time(12), time(17)))
        self.assertTrue(overlaps(time(9), time(17), time(10), time(11)))
        self.assertTrue(overlaps(time(9), time(12), time(9), time(12)))

    def test_overlap_is_symmetric(self):
        windows = [
            (time(6), time(9)), (time(8), time(10)), (time(9), time(12)),
            (time(11, 30), time(11, 45)), (time(12), time(18)),
        ]
        for a in windows:
            for b in windows:
                self.assertEqual(overlaps(*a, *b), overlaps(*b, *a), (a, b))


class ConflictingShiftsTests(unittest.TestCase):
    def setUp(self):
        self.shifts = [
            make_shift(1, time(9), time(13)),
            make_shift(2, time(14), time(18)),
            make_shift(3, time(9), time(13), staff_id=2),
            make_shift(4, time(12), time(15), status=ShiftStatus.cancelled),
            make_shift(5, time(9), time(13), shift_date=date(2026, 3, 15)),
        ]

    def _check(self, start, end, **kw):
        kw.setdefault("staff_id", 1)
        return [s.id for s in conflicting_shifts(self.shifts, shift_date=DAY, start=start, end=end, **kw)]

    def test_finds_same_staff_same_day_only(self):
        self.assertEqual(self._check(time(12), time(15)), [1, 2])

    def test_cancelled_shifts_never_conflict(self):
        self.assertEqual(self._check(time(13), time(14)), [])

    def test_shift_does_not_conflict_with_itself(self):
        self.assertEqual(self._check(time(9), time(13), exclude_shift_id=1), [])
        self.assertEqual(self._check(time(9), time(14, 30), exclude_shift_id=1), [2])

    def test_other_staff_member(self):
        self.assertEqual(self._check(time(10), time(11), staff_id=2), [3])


if __name__ == "__main__":
    unittest.main()
