# Pydantic schemas

from pydantic import BaseModel, field_validator
from datetime import datetime


class EventCreate(BaseModel):
    """Schema for creating or fully overwriting an event"""

    name: str = ""
    type: str = ""
    description: str = ""

    @field_validator('name', 'type', 'description')
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()


class EventUpdate(EventCreate):
    """Updates are full overwrites, so the shape matches creation"""


class EventResponse(BaseModel):
    """Response schema for event operations"""

    id: int
    name: str
    type: str
    description: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
