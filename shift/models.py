from __future__ import annotations
from datetime import date, time, datetime
from enum import Enum
from sqlalchemy import Date, Time, DateTime, String, Text, Boolean, ForeignKey, Enum as SAEnum, Index, text
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column
from core.database import Base

class ShiftStatus(str, Enum):
    scheduled = "scheduled"
    active = "active"
    completed = "completed"
    missed = "missed"
    cancelled = "cancelled"

TERMINAL_STATUSES = frozenset({ShiftStatus.completed, ShiftStatus.missed, ShiftStatus.cancelled})

# scheduled -> active -> completed is the normal path
ALLOWED_TRANSITIONS: dict[ShiftStatus, frozenset[ShiftStatus]] = {
    ShiftStatus.scheduled: frozenset({ShiftStatus.active, ShiftStatus.cancelled}),
    ShiftStatus.active: frozenset({ShiftStatus.completed, ShiftStatus.missed}),
    ShiftStatus.completed: frozenset(),
    ShiftStatus.missed: frozenset(),
    ShiftStatus.cancelled: frozenset(),
}

def can_transition(current: ShiftStatus, new: ShiftStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]

class ShiftAssignment(Base):
    """One staff member on one gate for one time window of one date."""
    __tablename__ = "shift_assignments"

    id: Mapped[int] = mapped_column(primary_key=True)

    org_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), index=True
    )

    # staff may live in an external directory, so no FK
    staff_id: Mapped[int] = mapped_column(nullable=False)
    staff_name: Mapped[str] = mapped_column(String(255), nullable=False)

    gate_location: Mapped[str] = mapped_column(String(64), nullable=False)

    shift_date: Mapped[date] = mapped_column(Date(), nullable=False)
    shift_start_time: Mapped[time] = mapped_column(Time(), nullable=False)
    shift_end_time: Mapped[time] = mapped_column(Time(), nullable=False)  # exclusive

    status: Mapped[ShiftStatus] = mapped_column(
        SAEnum(ShiftStatus, name="shift_status"), nullable=False, default=ShiftStatus.scheduled
    )
    requires_handover: Mapped[bool] = mapped_column(
        Boolean, server_default=text("false"), default=False, nullable=False
    )
    handover_notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    cancel_reason: Mapped[str | None] = mapped_column(Text(), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def starts_at(self) -> datetime:
        return datetime.combine(self.shift_date, self.shift_start_time)

    def ends_at(self) -> datetime:
        return datetime.combine(self.shift_date, self.shift_end_time)

# conflict lookups: one staff member on one day
Index("ix_shift_assignments_staff_date", ShiftAssignment.org_id, ShiftAssignment.staff_id, ShiftAssignment.shift_date)
# coverage lookups: one gate on one day
Index("ix_shift_assignments_gate_date", ShiftAssignment.org_id, ShiftAssignment.gate_location, ShiftAssignment.shift_date)
