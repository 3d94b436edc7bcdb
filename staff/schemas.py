from typing import Optional
from pydantic import BaseModel, ConfigDict

from .models import SecurityRole


class StaffSchema(BaseModel):
    id: int
    first_name: str
    last_name: str
    role: SecurityRole = SecurityRole.security_guard
    badge_number: Optional[str] = None
    assigned_gate: Optional[str] = None
    is_active: bool = True
    model_config = ConfigDict(from_attributes=True)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
