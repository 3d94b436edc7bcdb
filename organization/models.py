from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String
from core.database import Base

class Organization(Base):
    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # relationships
    gates = relationship("Gate", back_populates="org", cascade="all, delete-orphan")
    staff_members = relationship("StaffMember", back_populates="org", cascade="all, delete-orphan")
