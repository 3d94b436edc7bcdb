from fastapi import Depends, HTTPException
from auth.services.auth_service import CurrentUser, get_current_active_user
from staff.models import SecurityRole

# roles allowed to change the gate roster
MANAGER_ROLES = frozenset({SecurityRole.security_manager.value, SecurityRole.team_lead.value})

def require_member(user: CurrentUser = Depends(get_current_active_user)) -> int:
    return user.org_id

def require_manager(user: CurrentUser = Depends(get_current_active_user)) -> int:
    if user.role not in MANAGER_ROLES:
        raise HTTPException(status_code=403, detail="Security manager or team lead role required")
    return user.org_id
