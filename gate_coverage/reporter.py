from __future__ import annotations
from datetime import date
from typing import Iterable

from shift.models import ShiftAssignment, ShiftStatus
from .schemas import CoverageStats, CoverageStatus, CoverageSummary, CoverageView


def coverage_rate(views: Iterable[CoverageView]) -> CoverageSummary:
    views = list(views)
    total = len(views)
    covered = sum(1 for v in views if v.status == CoverageStatus.active)
    return CoverageSummary(
        covered_gates=covered,
        total_gates=total,
        rate=covered / total if total else 0.0,
    )


def shift_coverage_stats(
    shifts: Iterable[ShiftAssignment],
    *,
    start_date: date,
    end_date: date,
) -> CoverageStats:
    """
    Historical coverage over a date range. Cancelled shifts are not counted;
    completed and active shifts were covered, missed shifts are gaps.
    """
    total = covered = gaps = 0
    for s in shifts:
        if s.status == ShiftStatus.cancelled or not (start_date <= s.shift_date <= end_date):
            continue
        total += 1
        if s.status in (ShiftStatus.completed, ShiftStatus.active):
            covered += 1
        elif s.status == ShiftStatus.missed:
            gaps += 1
    return CoverageStats(
        start_date=start_date,
        end_date=end_date,
        total_shifts=total,
        covered_shifts=covered,
        gaps_detected=gaps,
        coverage_rate=covered / total if total else 0.0,
    )
