from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, Boolean, ForeignKey, UniqueConstraint, text
from core.database import Base

class Gate(Base):
    """Organization-defined gate on top of the fixed catalogue."""
    __tablename__ = "gates"

    id: Mapped[int] = mapped_column(primary_key=True)
    org_id: Mapped[int] = mapped_column(ForeignKey("organizations.id", ondelete="CASCADE"), index=True)
    code: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, server_default=text("true"), default=True, nullable=False)

    org = relationship("Organization", back_populates="gates")

    __table_args__ = (
        UniqueConstraint("org_id", "code", name="uq_gate_org_code"),  # no duplicate codes per organization
    )
