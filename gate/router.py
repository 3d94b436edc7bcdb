from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import require_manager
from .schemas import GateSchema, GateCreatePayload, GateCreate, GateUpdate
from . import service

gate_router = APIRouter(prefix="/gates", tags=["Gates"])

# List the gate catalogue (fixed + custom)
@gate_router.get("", response_model=list[GateSchema])
def list_gates(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    return service.get_gates(db, org_id=user.org_id)

# Get gate by code
@gate_router.get("/{code}", response_model=GateSchema)
def gate_detail(code: str, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    obj = service.get_gate(db, code, user.org_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Gate not found")
    return obj

# Add a custom gate
@gate_router.post("", response_model=GateSchema, status_code=status.HTTP_201_CREATED)
def gate_post(
    payload: GateCreatePayload,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
    _mgr=Depends(require_manager),
):
    internal = GateCreate(org_id=user.org_id, **payload.model_dump())
    try:
        return service.create_gate(db, internal)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Gate code already exists in this organization")

# Rename / describe a custom gate
@gate_router.patch("/{code}", response_model=GateSchema)
def gate_patch(
    code: str,
    payload: GateUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
    _mgr=Depends(require_manager),
):
    return service.update_gate(db, code, payload, org_id=user.org_id)

# Retire a custom gate
@gate_router.delete("/{code}")
def gate_delete(
    code: str,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
    _mgr=Depends(require_manager),
):
    service.deactivate_gate(db, code, org_id=user.org_id)
    return {"message": "Gate removed"}
