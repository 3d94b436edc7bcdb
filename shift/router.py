from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status, HTTPException
from sqlalchemy.orm import Session
from core.database import get_db
from core.errors import ValidationError
from auth.services.auth_service import get_current_active_user
from authz.deps import require_manager
from staff.directory import StaffDirectory, get_staff_directory
from .models import ShiftStatus
from .schemas import (
    ShiftSchema,
    ShiftCreatePayload,
    ShiftCreate,
    ShiftUpdate,
    ShiftCancelPayload,
    ShiftStatusChange,
    BulkShiftCreatePayload,
    BulkShiftResult,
    ConflictCheckPayload,
    ConflictCheckResult,
    StatusSyncResult,
)
from shift import service
from shift.conflict import find_conflicts

shift_router = APIRouter(prefix="/shifts", tags=["Shifts"])

@shift_router.get("", response_model=list[ShiftSchema])
def list_shifts(
    shift_date: Optional[date] = Query(None, description="Filter by day"),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    gate: Optional[str] = Query(None, description="Filter by gate code"),
    staff_id: Optional[int] = None,
    status: Optional[ShiftStatus] = None,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
):
    return service.get_shifts(
        db,
        org_id=user.org_id,
        shift_date=shift_date,
        start_date=start_date,
        end_date=end_date,
        gate_location=gate,
        staff_id=staff_id,
        status=status,
    )

# Several proposals in one call; each succeeds or fails on its own
@shift_router.post("/bulk", response_model=BulkShiftResult)
def bulk_create_shifts(
    payload: BulkShiftCreatePayload,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
    directory: StaffDirectory = Depends(get_staff_directory),
    _mgr=Depends(require_manager),
):
    internal = [ShiftCreate(org_id=user.org_id, **item.model_dump()) for item in payload.assignments]
    return service.bulk_create_shifts(db, internal, directory)

# Ask whether a window would double-book someone, without writing
@shift_router.post("/conflicts", response_model=ConflictCheckResult)
def check_conflicts(
    payload: ConflictCheckPayload,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
):
    if payload.shift_start_time >= payload.shift_end_time:
        raise ValidationError("shift_start_time must be before shift_end_time")
    clashes = find_conflicts(
        db,
        org_id=user.org_id,
        shift_date=payload.shift_date,
        start=payload.shift_start_time,
        end=payload.shift_end_time,
        staff_id=payload.staff_id,
        exclude_shift_id=payload.exclude_shift_id,
    )
    return {"conflict": bool(clashes), "conflicting_shift_ids": [s.id for s in clashes]}

# Persist clock-driven status changes
@shift_router.post("/sync-status", response_model=StatusSyncResult)
def sync_status(
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
    _mgr=Depends(require_manager),
):
    return service.advance_statuses(db, org_id=user.org_id)

@shift_router.get("/{shift_id}", response_model=ShiftSchema)
def get_shift(shift_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    obj = service.get_shift_for_org(db, shift_id, user.org_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Shift not found")
    return obj

@shift_router.post("", response_model=ShiftSchema, status_code=status.HTTP_201_CREATED)
def create_shift(
    payload: ShiftCreatePayload,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
    directory: StaffDirectory = Depends(get_staff_directory),
    _mgr=Depends(require_manager),
):
    internal = ShiftCreate(org_id=user.org_id, **payload.model_dump())
    return service.create_shift(db, internal, directory)

@shift_router.patch("/{shift_id}", response_model=ShiftSchema)
def patch_shift(
    shift_id: int,
    payload: ShiftUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
    directory: StaffDirectory = Depends(get_staff_directory),
    _mgr=Depends(require_manager),
):
    return service.update_shift(db, shift_id, payload, org_id=user.org_id, directory=directory)

@shift_router.post("/{shift_id}/cancel", response_model=ShiftSchema)
def cancel_shift(
    shift_id: int,
    payload: Optional[ShiftCancelPayload] = None,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
    _mgr=Depends(require_manager),
):
    reason = payload.reason if payload else None
    return service.cancel_shift(db, shift_id, org_id=user.org_id, reason=reason)

# Operator override, e.g. marking a no-show as missed
@shift_router.post("/{shift_id}/status", response_model=ShiftSchema)
def change_status(
    shift_id: int,
    payload: ShiftStatusChange,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
    _mgr=Depends(require_manager),
):
    return service.transition_status(
        db, shift_id, org_id=user.org_id, status=payload.status, reason=payload.reason
    )

@shift_router.delete("/{shift_id}")
def delete_shift(
    shift_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
    _mgr=Depends(require_manager),
):
    service.delete_shift(db, shift_id, org_id=user.org_id)
    return {"message": "Shift deleted"}
