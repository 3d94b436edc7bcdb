"""
Double-booking detection for a single staff member.

Shift windows are half-open ``[start, end)``: a shift ending at 16:00 does
not collide with one starting at 16:00. Cancelled shifts never conflict.
"""
from __future__ import annotations
from datetime import date, time
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import ShiftAssignment, ShiftStatus


def overlaps(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    return not (a_end <= b_start or a_start >= b_end)


def conflicting_shifts(
    shifts: Iterable[ShiftAssignment],
    *,
    shift_date: date,
    start: time,
    end: time,
    staff_id: int,
    exclude_shift_id: Optional[int] = None,
) -> List[ShiftAssignment]:
    return [
        s for s in shifts
        if s.staff_id == staff_id
        and s.shift_date == shift_date
        and s.status != ShiftStatus.cancelled
        and (exclude_shift_id is None or s.id != exclude_shift_id)
        and overlaps(start, end, s.shift_start_time, s.shift_end_time)
    ]


def _candidates(db: Session, *, org_id: int, staff_id: int, shift_date: date) -> List[ShiftAssignment]:
    stmt = select(ShiftAssignment).where(
        ShiftAssignment.org_id == org_id,
        ShiftAssignment.staff_id == staff_id,
        ShiftAssignment.shift_date == shift_date,
        ShiftAssignment.status != ShiftStatus.cancelled,
    )
    return list(db.scalars(stmt))


def find_conflicts(
    db: Session,
    *,
    org_id: int,
    shift_date: date,
    start: time,
    end: time,
    staff_id: int,
    exclude_shift_id: Optional[int] = None,
) -> List[ShiftAssignment]:
    return conflicting_shifts(
        _candidates(db, org_id=org_id, staff_id=staff_id, shift_date=shift_date),
        shift_date=shift_date,
        start=start,
        end=end,
        staff_id=staff_id,
        exclude_shift_id=exclude_shift_id,
    )


def has_conflict(
    db: Session,
    *,
    org_id: int,
    shift_date: date,
    start: time,
    end: time,
    staff_id: int,
    exclude_shift_id: Optional[int] = None,
) -> bool:
    return bool(find_conflicts(
        db,
        org_id=org_id,
        shift_date=shift_date,
        start=start,
        end=end,
        staff_id=staff_id,
        exclude_shift_id=exclude_shift_id,
    ))
