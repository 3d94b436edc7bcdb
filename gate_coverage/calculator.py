"""
Live gate coverage.

Everything here is a pure function of the shifts handed in, the clock
value ``as_of`` and the staff directory; nothing is written. A gate is
``active`` while somebody is on duty there, ``scheduled`` when a shift
later today is still to start, and ``vacant`` otherwise.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from gate.schemas import GateSchema
from shift.models import ShiftAssignment, ShiftStatus, TERMINAL_STATUSES
from staff.directory import StaffDirectory, StaffDirectoryError
from .schemas import AssignmentView, CoverageStatus, CoverageView

logger = logging.getLogger(__name__)


def effective_status(shift: ShiftAssignment, as_of: datetime) -> ShiftStatus:
    """Stored status advanced by the clock, without persisting anything."""
    if shift.status in TERMINAL_STATUSES:
        return shift.status
    if shift.status == ShiftStatus.scheduled and shift.starts_at() <= as_of < shift.ends_at():
        return ShiftStatus.active
    if shift.status == ShiftStatus.active and shift.ends_at() <= as_of:
        return ShiftStatus.completed
    return shift.status


class StaffResolver:
    """
    Display name and badge lookup for one coverage computation.

    Results are memoized. After the first directory failure the remaining
    lookups fall back straight away instead of waiting on the directory again.
    """

    def __init__(self, directory: StaffDirectory):
        self.directory = directory
        self.degraded = False
        self._seen: dict[int, tuple[str, Optional[str]]] = {}

    def resolve(self, staff_id: int) -> tuple[str, Optional[str]]:
        if staff_id in self._seen:
            return self._seen[staff_id]
        staff = None
        if not self.degraded:
            try:
                staff = self.directory.get_staff(staff_id)
            except StaffDirectoryError as exc:
                logger.warning("staff directory degraded, showing raw staff ids: %s", exc)
                self.degraded = True
        if staff is None:
            label = (str(staff_id), None)
        else:
            label = (staff.display_name, staff.badge_number)
        self._seen[staff_id] = label
        return label


def _view(shift: ShiftAssignment, status: ShiftStatus, staff: StaffResolver) -> AssignmentView:
    name, badge = staff.resolve(shift.staff_id)
    return AssignmentView(
        shift_id=shift.id,
        staff_id=shift.staff_id,
        staff_name=name,
        staff_badge_number=badge,
        shift_date=shift.shift_date,
        shift_start_time=shift.shift_start_time,
        shift_end_time=shift.shift_end_time,
        status=status,
        requires_handover=shift.requires_handover,
    )


def _by_start(shift: ShiftAssignment):
    return (shift.shift_start_time, shift.id)


def coverage_for(
    gate: GateSchema,
    shifts: Iterable[ShiftAssignment],
    *,
    as_of: datetime,
    staff: StaffResolver,
) -> CoverageView:
    today, now = as_of.date(), as_of.time()
    todays = [s for s in shifts if s.gate_location == gate.code and s.shift_date == today]

    # several guards on one gate at once is allowed
    on_duty = sorted((s for s in todays if effective_status(s, as_of) == ShiftStatus.active), key=_by_start)
    upcoming = sorted(
        (s for s in todays
         if effective_status(s, as_of) == ShiftStatus.scheduled and s.shift_start_time >= now),
        key=_by_start,
    )

    if on_duty:
        status = CoverageStatus.active
    elif upcoming:
        status = CoverageStatus.scheduled
    else:
        status = CoverageStatus.vacant

    active_views = [_view(s, ShiftStatus.active, staff) for s in on_duty]
    return CoverageView(
        gate=gate.code,
        gate_name=gate.name,
        status=status,
        current_assignment=active_views[0] if active_views else None,
        next_assignment=_view(upcoming[0], ShiftStatus.scheduled, staff) if upcoming else None,
        active_assignments=active_views,
    )


def coverage_board(
    gates: Sequence[GateSchema],
    shifts: Iterable[ShiftAssignment],
    *,
    as_of: datetime,
    directory: StaffDirectory,
) -> List[CoverageView]:
    shifts = list(shifts)
    staff = StaffResolver(directory)
    return [coverage_for(gate, shifts, as_of=as_of, staff=staff) for gate in gates]
