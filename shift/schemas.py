from datetime import date, time, datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from .models import ShiftStatus

class ShiftSchema(BaseModel):
    id: int
    org_id: int
    staff_id: int
    staff_name: str
    gate_location: str
    shift_date: date
    shift_start_time: time
    shift_end_time: time
    status: ShiftStatus
    requires_handover: bool = False
    handover_notes: Optional[str] = None
    notes: Optional[str] = None
    cancel_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class ShiftCreatePayload(BaseModel):
    staff_id: int
    shift_date: date
    shift_start_time: time = Field(..., description="HH:MM, site-local")
    shift_end_time: time = Field(..., description="HH:MM, site-local, exclusive")
    gate_location: str
    requires_handover: bool = False
    notes: Optional[str] = None

    # start < end is checked by the service so the error carries its kind
    model_config = ConfigDict(extra="forbid")

# Internal DTO the service uses; blanks are checked by the service
class ShiftCreate(BaseModel):
    org_id: int
    staff_id: Optional[int] = None
    shift_date: Optional[date] = None
    shift_start_time: Optional[time] = None
    shift_end_time: Optional[time] = None
    gate_location: Optional[str] = None
    requires_handover: bool = False
    notes: Optional[str] = None

class ShiftUpdate(BaseModel):
    staff_id: Optional[int] = None
    shift_date: Optional[date] = None
    shift_start_time: Optional[time] = None
    shift_end_time: Optional[time] = None
    gate_location: Optional[str] = None
    requires_handover: Optional[bool] = None
    notes: Optional[str] = None
    handover_notes: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

class ShiftCancelPayload(BaseModel):
    reason: Optional[str] = None

class ShiftStatusChange(BaseModel):
    status: ShiftStatus
    reason: Optional[str] = None

class BulkShiftCreatePayload(BaseModel):
    assignments: list[ShiftCreatePayload] = Field(..., min_length=1)

class BulkShiftResult(BaseModel):
    success_count: int
    failed_count: int
    created: list[ShiftSchema] = []
    errors: list[str] = []

class ConflictCheckPayload(BaseModel):
    staff_id: int
    shift_date: date
    shift_start_time: time
    shift_end_time: time
    exclude_shift_id: Optional[int] = None

class ConflictCheckResult(BaseModel):
    conflict: bool
    conflicting_shift_ids: list[int] = []

class StatusSyncResult(BaseModel):
    activated: int
    completed: int
