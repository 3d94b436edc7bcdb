"""
Identity of the caller.

Authentication happens upstream; the gateway in front of this service
injects the verified user, organization and security role as headers.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException


@dataclass
class CurrentUser:
    id: int
    org_id: int
    role: str = "security_guard"


def get_current_active_user(
    x_user_id: Optional[int] = Header(None),
    x_org_id: Optional[int] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> CurrentUser:
    if x_user_id is None or x_org_id is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return CurrentUser(id=x_user_id, org_id=x_org_id, role=x_user_role or "security_guard")
