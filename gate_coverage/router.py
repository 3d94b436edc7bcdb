from datetime import date, datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import require_member
from staff.directory import StaffDirectory, get_staff_directory
from .schemas import CoverageStats, CoverageSummary, CoverageView
from gate_coverage import service

coverage_router = APIRouter(prefix="/coverage", tags=["Coverage"])

@coverage_router.get("", response_model=list[CoverageView])
def list_coverage(
    as_of: Optional[datetime] = Query(None, description="Evaluate coverage at this site-local time instead of now"),
    db: Session = Depends(get_db),
    org_id: int = Depends(require_member),
    directory: StaffDirectory = Depends(get_staff_directory),
):
    return service.get_coverage_board(db, org_id=org_id, directory=directory, as_of=as_of)

@coverage_router.get("/summary", response_model=CoverageSummary)
def coverage_summary(
    as_of: Optional[datetime] = None,
    db: Session = Depends(get_db),
    org_id: int = Depends(require_member),
    directory: StaffDirectory = Depends(get_staff_directory),
):
    return service.get_coverage_summary(db, org_id=org_id, directory=directory, as_of=as_of)

@coverage_router.get("/stats", response_model=CoverageStats)
def coverage_stats(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
    org_id: int = Depends(require_member),
):
    return service.get_coverage_stats(db, org_id=org_id, start_date=start_date, end_date=end_date)

@coverage_router.get("/{gate}", response_model=CoverageView)
def coverage_for_gate(
    gate: str,
    as_of: Optional[datetime] = None,
    db: Session = Depends(get_db),
    org_id: int = Depends(require_member),
    directory: StaffDirectory = Depends(get_staff_directory),
):
    return service.get_coverage(db, gate, org_id=org_id, directory=directory, as_of=as_of)
