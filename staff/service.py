from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import select
from .models import StaffMember

def get_staff_members(db: Session, *, org_id: int, active_only: bool = False) -> List[StaffMember]:
    statement = select(StaffMember).where(StaffMember.org_id == org_id)
    if active_only:
        statement = statement.where(StaffMember.is_active.is_(True))
    statement = statement.order_by(StaffMember.last_name.asc(), StaffMember.first_name.asc())
    return list(db.scalars(statement))

def get_staff_member_for_org(db: Session, staff_id: int, org_id: int) -> Optional[StaffMember]:
    statement = select(StaffMember).where(StaffMember.id == staff_id, StaffMember.org_id == org_id)
    return db.scalars(statement).first()
