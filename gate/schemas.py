from typing import Optional
from pydantic import BaseModel, ConfigDict

class GateSchema(BaseModel):
    code: str
    name: str
    description: Optional[str] = None
    is_custom: bool = False
    model_config = ConfigDict(from_attributes=True)

# PUBLIC payload, what clients send
class GateCreatePayload(BaseModel):
    code: str
    name: Optional[str] = None
    description: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


# INTERNAL DTO for the service
class GateCreate(BaseModel):
    org_id: int
    code: str
    name: Optional[str] = None
    description: Optional[str] = None

class GateUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
