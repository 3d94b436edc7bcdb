from fastapi import APIRouter, Depends, HTTPException

from auth.services.auth_service import get_current_active_user
from .directory import StaffDirectory, StaffDirectoryError, get_staff_directory
from .schemas import StaffSchema

staff_router = APIRouter(prefix="/staff", tags=["Staff"])

# Staff that can be put on a shift
@staff_router.get("/active", response_model=list[StaffSchema])
def list_active_staff(
    directory: StaffDirectory = Depends(get_staff_directory),
    user=Depends(get_current_active_user),
):
    try:
        return directory.get_active_staff()
    except StaffDirectoryError:
        raise HTTPException(status_code=502, detail="Staff directory unavailable")

# Get a staff member by id
@staff_router.get("/{staff_id}", response_model=StaffSchema)
def staff_detail(
    staff_id: int,
    directory: StaffDirectory = Depends(get_staff_directory),
    user=Depends(get_current_active_user),
):
    try:
        obj = directory.get_staff(staff_id)
    except StaffDirectoryError:
        raise HTTPException(status_code=502, detail="Staff directory unavailable")
    if not obj:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return obj
