from __future__ import annotations
from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.errors import ValidationError, NotFoundError
from gate_coverage.cache import coverage_cache
from .catalogue import GATE_CODE_RE, GATE_DESCRIPTIONS, format_gate_location, is_fixed_gate
from .models import Gate
from .schemas import GateSchema, GateCreate, GateUpdate


def _fixed_gates() -> List[GateSchema]:
    return [
        GateSchema(code=code, name=format_gate_location(code), description=desc, is_custom=False)
        for code, desc in GATE_DESCRIPTIONS.items()
    ]

def _as_schema(row: Gate) -> GateSchema:
    return GateSchema(code=row.code, name=row.name, description=row.description, is_custom=True)

def get_custom_gate(db: Session, code: str, org_id: int) -> Optional[Gate]:
    stmt = select(Gate).where(Gate.org_id == org_id, Gate.code == code, Gate.is_active.is_(True))
    return db.scalars(stmt).first()

def get_gates(db: Session, *, org_id: int) -> List[GateSchema]:
    """Fixed catalogue first, then the organization's active custom gates by code."""
    stmt = (
        select(Gate)
        .where(Gate.org_id == org_id, Gate.is_active.is_(True))
        .order_by(Gate.code.asc())
    )
    return _fixed_gates() + [_as_schema(row) for row in db.scalars(stmt)]

def get_gate(db: Session, code: str, org_id: int) -> Optional[GateSchema]:
    if is_fixed_gate(code):
        return GateSchema(code=code, name=format_gate_location(code), description=GATE_DESCRIPTIONS[code])
    row = get_custom_gate(db, code, org_id)
    return _as_schema(row) if row else None

def is_known_gate(db: Session, code: str, org_id: int) -> bool:
    return is_fixed_gate(code) or get_custom_gate(db, code, org_id) is not None

def create_gate(db: Session, dto: GateCreate) -> GateSchema:
    code = (dto.code or "").strip().lower()
    if not GATE_CODE_RE.match(code):
        raise ValidationError("gate code must be a lower-case identifier such as 'loading_dock'")
    if is_fixed_gate(code):
        raise ValidationError(f"'{code}' is a built-in gate")

    # a retired custom gate with the same code is brought back
    row = db.scalars(select(Gate).where(Gate.org_id == dto.org_id, Gate.code == code)).first()
    if row is not None and not row.is_active:
        row.is_active = True
        row.name = dto.name or format_gate_location(code)
        row.description = dto.description
    else:
        # an active duplicate fails on uq_gate_org_code
        row = Gate(
            org_id=dto.org_id,
            code=code,
            name=dto.name or format_gate_location(code),
            description=dto.description,
        )
        db.add(row)
    db.commit()
    db.refresh(row)
    coverage_cache.invalidate(dto.org_id)
    return _as_schema(row)

def update_gate(db: Session, code: str, patch: GateUpdate, *, org_id: int) -> GateSchema:
    if is_fixed_gate(code):
        raise ValidationError(f"'{code}' is a built-in gate and cannot be changed")
    row = get_custom_gate(db, code, org_id)
    if not row:
        raise NotFoundError("gate not found")
    data = patch.model_dump(exclude_unset=True, exclude_none=True)
    for k, v in data.items():
        setattr(row, k, v)
    db.commit()
    db.refresh(row)
    coverage_cache.invalidate(org_id)
    return _as_schema(row)

def deactivate_gate(db: Session, code: str, *, org_id: int) -> None:
    """Custom gates are retired, not deleted; historical shifts keep their code."""
    if is_fixed_gate(code):
        raise ValidationError(f"'{code}' is a built-in gate and cannot be removed")
    row = get_custom_gate(db, code, org_id)
    if not row:
        raise NotFoundError("gate not found")
    row.is_active = False
    db.commit()
    coverage_cache.invalidate(org_id)
