from pydantic import BaseModel, field_validator
from datetime import datetime


class PropertyCreate(BaseModel):
    """Schema for creating or fully overwriting a property"""

    name: str = ""
    type: str = ""
    description: str = ""

    @field_validator('name', 'type', 'description')
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()


class PropertyUpdate(PropertyCreate):
    pass


class PropertyResponse(BaseModel):
    id: int
    name: str
    type: str
    description: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
