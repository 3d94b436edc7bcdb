# shift/service.py
from __future__ import annotations
import logging
import threading
import weakref
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Iterator, Optional, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.errors import ShiftError, ValidationError, ConflictError, NotFoundError, InvalidStateError
from gate_coverage.cache import coverage_cache
from gate.service import is_known_gate
from staff.directory import StaffDirectory, StaffDirectoryError
from staff.schemas import StaffSchema
from .conflict import find_conflicts
from .models import ShiftAssignment, ShiftStatus, can_transition
from .schemas import ShiftCreate, ShiftUpdate

logger = logging.getLogger(__name__)

# fields that move a shift in time, between gates or between people
SCHEDULE_FIELDS = frozenset({"staff_id", "shift_date", "shift_start_time", "shift_end_time", "gate_location"})

REQUIRED_FIELDS = ("staff_id", "shift_date", "shift_start_time", "shift_end_time", "gate_location")

# entries disappear once no writer holds the lock
_write_locks: weakref.WeakValueDictionary[tuple[int, int], threading.Lock] = weakref.WeakValueDictionary()
_write_locks_guard = threading.Lock()


@contextmanager
def _staff_write_lock(org_id: int, staff_id: int) -> Iterator[None]:
    """Serializes conflict check + commit for one staff member."""
    with _write_locks_guard:
        lock = _write_locks.get((org_id, staff_id))
        if lock is None:
            lock = _write_locks[(org_id, staff_id)] = threading.Lock()
    with lock:
        yield


# ---------- store ----------

def get_shift(db: Session, shift_id: int) -> ShiftAssignment | None:
    return db.get(ShiftAssignment, shift_id)

def get_shift_for_org(db: Session, shift_id: int, org_id: int) -> Optional[ShiftAssignment]:
    stmt = select(ShiftAssignment).where(ShiftAssignment.id == shift_id, ShiftAssignment.org_id == org_id)
    return db.scalars(stmt).first()

def get_shifts(
    db: Session,
    *,
    org_id: Optional[int] = None,
    shift_date: Optional[date] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    gate_location: Optional[str] = None,
    staff_id: Optional[int] = None,
    status: Optional[ShiftStatus] = None,
) -> list[ShiftAssignment]:
    stmt = select(ShiftAssignment)
    if org_id is not None:
        stmt = stmt.where(ShiftAssignment.org_id == org_id)
    if shift_date is not None:
        stmt = stmt.where(ShiftAssignment.shift_date == shift_date)
    if start_date is not None:
        stmt = stmt.where(ShiftAssignment.shift_date >= start_date)
    if end_date is not None:
        stmt = stmt.where(ShiftAssignment.shift_date <= end_date)
    if gate_location is not None:
        stmt = stmt.where(ShiftAssignment.gate_location == gate_location)
    if staff_id is not None:
        stmt = stmt.where(ShiftAssignment.staff_id == staff_id)
    if status is not None:
        stmt = stmt.where(ShiftAssignment.status == status)
    stmt = stmt.order_by(ShiftAssignment.shift_date, ShiftAssignment.shift_start_time, ShiftAssignment.id)
    return list(db.scalars(stmt))


# ---------- validation helpers ----------

def _require_fields(dto: ShiftCreate) -> None:
    missing = []
    for name in REQUIRED_FIELDS:
        value = getattr(dto, name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    if missing:
        raise ValidationError(f"missing required fields: {', '.join(missing)}")

def _validate_window(start: time, end: time) -> None:
    if start >= end:
        raise ValidationError("shift_start_time must be before shift_end_time")

def _validate_gate(db: Session, gate: str, org_id: int) -> None:
    if not is_known_gate(db, gate, org_id):
        raise ValidationError(f"unknown gate '{gate}'")

def _resolve_active_staff(directory: StaffDirectory, staff_id: int) -> StaffSchema:
    try:
        staff = directory.get_staff(staff_id)
    except StaffDirectoryError as exc:
        raise ValidationError("staff directory unavailable; cannot verify staff member") from exc
    if staff is None:
        raise ValidationError(f"staff member {staff_id} not found")
    if not staff.is_active:
        raise ValidationError(f"staff member {staff_id} is not active")
    return staff

def _ensure_no_conflict(
    db: Session,
    *,
    org_id: int,
    staff_id: int,
    shift_date: date,
    start: time,
    end: time,
    exclude_shift_id: Optional[int] = None,
) -> None:
    clashes = find_conflicts(
        db,
        org_id=org_id,
        shift_date=shift_date,
        start=start,
        end=end,
        staff_id=staff_id,
        exclude_shift_id=exclude_shift_id,
    )
    if clashes:
        other = clashes[0]
        logger.warning(
            "rejected shift for staff %s on %s %s-%s: overlaps shift %s",
            staff_id, shift_date, start, end, other.id,
        )
        raise ConflictError(
            f"staff member already has a shift at this time "
            f"(shift {other.id}, {other.shift_start_time:%H:%M}-{other.shift_end_time:%H:%M})"
        )

def _ensure_not_started(row: ShiftAssignment, as_of: Optional[datetime]) -> None:
    # still stored as scheduled, but the clock says the guard should be on duty
    if row.status == ShiftStatus.scheduled and (as_of or datetime.now()) >= row.starts_at():
        raise InvalidStateError(f"shift {row.id} has already started; record it as active, completed or missed instead")

def _apply_transition(row: ShiftAssignment, new_status: ShiftStatus) -> None:
    if not can_transition(row.status, new_status):
        raise InvalidStateError(f"cannot move a {row.status.value} shift to {new_status.value}")
    row.status = new_status


# ---------- mutations ----------

def create_shift(db: Session, dto: ShiftCreate, directory: StaffDirectory) -> ShiftAssignment:
    _require_fields(dto)
    _validate_window(dto.shift_start_time, dto.shift_end_time)
    gate = dto.gate_location.strip()
    _validate_gate(db, gate, dto.org_id)
    # inactive staff is rejected before any conflict check
    staff = _resolve_active_staff(directory, dto.staff_id)

    with _staff_write_lock(dto.org_id, dto.staff_id):
        try:
            _ensure_no_conflict(
                db,
                org_id=dto.org_id,
                staff_id=dto.staff_id,
                shift_date=dto.shift_date,
                start=dto.shift_start_time,
                end=dto.shift_end_time,
            )
            row = ShiftAssignment(
                org_id=dto.org_id,
                staff_id=dto.staff_id,
                staff_name=staff.display_name,
                gate_location=gate,
                shift_date=dto.shift_date,
                shift_start_time=dto.shift_start_time,
                shift_end_time=dto.shift_end_time,
                status=ShiftStatus.scheduled,
                requires_handover=dto.requires_handover,
                notes=dto.notes,
            )
            db.add(row)
            db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(row)
    coverage_cache.invalidate(dto.org_id)
    logger.info(
        "scheduled shift %s: staff %s at %s on %s %s-%s",
        row.id, row.staff_id, row.gate_location, row.shift_date, row.shift_start_time, row.shift_end_time,
    )
    return row

def bulk_create_shifts(db: Session, dtos: List[ShiftCreate], directory: StaffDirectory) -> dict:
    """
    Each proposal is validated and committed on its own, in order, so later
    proposals are checked against earlier ones from the same batch.
    """
    created: list[ShiftAssignment] = []
    errors: list[str] = []
    for index, dto in enumerate(dtos, start=1):
        try:
            created.append(create_shift(db, dto, directory))
        except ShiftError as exc:
            errors.append(f"#{index}: {exc.detail}")
    return {
        "success_count": len(created),
        "failed_count": len(errors),
        "created": created,
        "errors": errors,
    }

def update_shift(
    db: Session,
    shift_id: int,
    patch: ShiftUpdate,
    *,
    org_id: int,
    directory: StaffDirectory,
    as_of: Optional[datetime] = None,
) -> ShiftAssignment:
    row = get_shift_for_org(db, shift_id, org_id)
    if not row:
        raise NotFoundError("shift not found")
    if row.status == ShiftStatus.cancelled:
        raise InvalidStateError("cancelled shifts cannot be edited")

    data = patch.model_dump(exclude_unset=True)
    if data.get("requires_handover", False) is None:
        del data["requires_handover"]

    touched = SCHEDULE_FIELDS & data.keys()
    if touched and row.status != ShiftStatus.scheduled:
        raise InvalidStateError(f"only scheduled shifts can be rescheduled (shift is {row.status.value})")
    if touched:
        _ensure_not_started(row, as_of)
    for name in touched:
        value = data[name]
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{name} cannot be blank")

    new_start = data.get("shift_start_time", row.shift_start_time)
    new_end = data.get("shift_end_time", row.shift_end_time)
    _validate_window(new_start, new_end)

    if "gate_location" in data:
        data["gate_location"] = data["gate_location"].strip()
        _validate_gate(db, data["gate_location"], org_id)

    new_staff_id = data.get("staff_id", row.staff_id)
    if new_staff_id != row.staff_id:
        staff = _resolve_active_staff(directory, new_staff_id)
        data["staff_name"] = staff.display_name

    with _staff_write_lock(org_id, new_staff_id):
        try:
            if touched:
                _ensure_no_conflict(
                    db,
                    org_id=org_id,
                    staff_id=new_staff_id,
                    shift_date=data.get("shift_date", row.shift_date),
                    start=new_start,
                    end=new_end,
                    exclude_shift_id=row.id,
                )
            for k, v in data.items():
                setattr(row, k, v)
            db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(row)
    coverage_cache.invalidate(org_id)
    logger.info("updated shift %s (%s)", row.id, ", ".join(sorted(data)) or "no changes")
    return row

def cancel_shift(
    db: Session,
    shift_id: int,
    *,
    org_id: int,
    reason: Optional[str] = None,
    as_of: Optional[datetime] = None,
) -> ShiftAssignment:
    row = get_shift_for_org(db, shift_id, org_id)
    if not row:
        raise NotFoundError("shift not found")
    _ensure_not_started(row, as_of)
    _apply_transition(row, ShiftStatus.cancelled)
    row.cancel_reason = reason
    db.commit()
    db.refresh(row)
    coverage_cache.invalidate(org_id)
    logger.info("cancelled shift %s", row.id)
    return row

def delete_shift(db: Session, shift_id: int, *, org_id: int, as_of: Optional[datetime] = None) -> None:
    """Remove a scheduled shift that has not started yet."""
    row = get_shift_for_org(db, shift_id, org_id)
    if not row:
        raise NotFoundError("shift not found")
    if row.status != ShiftStatus.scheduled:
        raise InvalidStateError(f"cannot delete a {row.status.value} shift")

    _ensure_not_started(row, as_of)
    db.delete(row)
    db.commit()
    coverage_cache.invalidate(org_id)
    logger.info("deleted shift %s", shift_id)

def transition_status(
    db: Session,
    shift_id: int,
    *,
    org_id: int,
    status: ShiftStatus,
    reason: Optional[str] = None,
    as_of: Optional[datetime] = None,
) -> ShiftAssignment:
    """Operator override of the lifecycle, e.g. recording a missed shift."""
    row = get_shift_for_org(db, shift_id, org_id)
    if not row:
        raise NotFoundError("shift not found")
    if row.status == status:
        return row

    old = row.status
    if status == ShiftStatus.cancelled:
        _ensure_not_started(row, as_of)
    _apply_transition(row, status)
    if status == ShiftStatus.cancelled:
        row.cancel_reason = reason
    elif reason:
        row.notes = f"{row.notes}\n{reason}" if row.notes else reason
    db.commit()
    db.refresh(row)
    coverage_cache.invalidate(org_id)
    logger.info("shift %s: %s -> %s", row.id, old.value, status.value)
    return row

def advance_statuses(db: Session, *, org_id: int, as_of: Optional[datetime] = None) -> dict:
    """
    Persist the clock-driven moves scheduled -> active -> completed.

    A scheduled shift is only activated while its window is open; once the
    window has passed without anyone activating it, it stays scheduled for an
    operator to resolve. Only shifts stored as active are completed.
    """
    as_of = as_of or datetime.now()
    stmt = select(ShiftAssignment).where(
        ShiftAssignment.org_id == org_id,
        ShiftAssignment.shift_date <= as_of.date(),
        ShiftAssignment.status.in_([ShiftStatus.scheduled, ShiftStatus.active]),
    )
    activated = completed = 0
    for row in list(db.scalars(stmt)):
        if row.status == ShiftStatus.scheduled:
            if row.starts_at() <= as_of < row.ends_at():
                row.status = ShiftStatus.active
                activated += 1
        elif row.ends_at() <= as_of:
            row.status = ShiftStatus.completed
            completed += 1

    if activated or completed:
        db.commit()
        coverage_cache.invalidate(org_id)
        logger.info("org %s: %d shifts activated, %d completed", org_id, activated, completed)
    return {"activated": activated, "completed": completed}
