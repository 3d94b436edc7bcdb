from datetime import date, time
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, computed_field

from shift.models import ShiftStatus


class CoverageStatus(str, Enum):
    vacant = "vacant"
    scheduled = "scheduled"
    active = "active"


class AssignmentView(BaseModel):
    shift_id: int
    staff_id: int
    staff_name: str
    staff_badge_number: Optional[str] = None
    shift_date: date
    shift_start_time: time
    shift_end_time: time
    status: ShiftStatus
    requires_handover: bool = False


class CoverageView(BaseModel):
    gate: str
    gate_name: str
    status: CoverageStatus
    current_assignment: Optional[AssignmentView] = None
    next_assignment: Optional[AssignmentView] = None
    active_assignments: list[AssignmentView] = []

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def covered(self) -> bool:
        return self.status == CoverageStatus.active


class CoverageSummary(BaseModel):
    covered_gates: int
    total_gates: int
    rate: float


class CoverageStats(BaseModel):
    start_date: date
    end_date: date
    total_shifts: int
    covered_shifts: int
    gaps_detected: int
    coverage_rate: float
