from __future__ import annotations
from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Boolean, ForeignKey, Enum as SAEnum, text
from core.database import Base

class SecurityRole(str, Enum):
    security_manager = "security_manager"
    team_lead = "team_lead"
    security_guard = "security_guard"

class StaffMember(Base):
    """Local replica of the staff directory; this service only reads it."""
    __tablename__ = "staff_members"

    id: Mapped[int] = mapped_column(primary_key=True)
    org_id: Mapped[int] = mapped_column(ForeignKey("organizations.id", ondelete="CASCADE"), index=True)

    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    role: Mapped[SecurityRole] = mapped_column(
        SAEnum(SecurityRole, name="security_role"), nullable=False, default=SecurityRole.security_guard
    )
    badge_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    assigned_gate: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, server_default=text("true"), default=True, nullable=False)

    org = relationship("Organization", back_populates="staff_members")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
