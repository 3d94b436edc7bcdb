# coverage/service.py
from __future__ import annotations
import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session

from core.errors import NotFoundError, ValidationError
from gate import service as gate_service
from shift import service as shift_service
from staff.directory import StaffDirectory
from .cache import coverage_cache
from .calculator import coverage_board
from .reporter import coverage_rate, shift_coverage_stats
from .schemas import CoverageStats, CoverageSummary, CoverageView

logger = logging.getLogger(__name__)


def get_coverage_board(
    db: Session,
    *,
    org_id: int,
    directory: StaffDirectory,
    as_of: Optional[datetime] = None,
) -> list[CoverageView]:
    """
    Coverage of every gate of the organization. Only live reads (no
    explicit ``as_of``) go through the cache.
    """
    live = as_of is None
    as_of = as_of or datetime.now()
    key = ("board", as_of.date())
    if live:
        cached = coverage_cache.get(org_id, key)
        if cached is not None:
            return cached

    gates = gate_service.get_gates(db, org_id=org_id)
    shifts = shift_service.get_shifts(db, org_id=org_id, shift_date=as_of.date())
    views = coverage_board(gates, shifts, as_of=as_of, directory=directory)
    logger.debug("computed coverage for org %s: %d gates, %d shifts", org_id, len(gates), len(shifts))

    if live:
        coverage_cache.put(org_id, key, views)
    return views


def get_coverage(
    db: Session,
    gate: str,
    *,
    org_id: int,
    directory: StaffDirectory,
    as_of: Optional[datetime] = None,
) -> CoverageView:
    for view in get_coverage_board(db, org_id=org_id, directory=directory, as_of=as_of):
        if view.gate == gate:
            return view
    raise NotFoundError(f"unknown gate '{gate}'")


def get_coverage_summary(
    db: Session,
    *,
    org_id: int,
    directory: StaffDirectory,
    as_of: Optional[datetime] = None,
) -> CoverageSummary:
    return coverage_rate(get_coverage_board(db, org_id=org_id, directory=directory, as_of=as_of))


def get_coverage_stats(db: Session, *, org_id: int, start_date: date, end_date: date) -> CoverageStats:
    if start_date > end_date:
        raise ValidationError("start_date must not be after end_date")
    shifts = shift_service.get_shifts(db, org_id=org_id, start_date=start_date, end_date=end_date)
    return shift_coverage_stats(shifts, start_date=start_date, end_date=end_date)
