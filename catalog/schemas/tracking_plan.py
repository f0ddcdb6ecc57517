from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime

from catalog.schemas.event import EventResponse
from catalog.schemas.property import PropertyResponse

DEFAULT_EVENT_TYPE = "track"


class TrackingPlanPropertySpec(BaseModel):
    """A property declared on an event inside a tracking plan"""

    name: str = ""
    type: str = ""
    required: bool = False
    description: str = ""

    @field_validator('name', 'type', 'description')
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()


class TrackingPlanEventSpec(BaseModel):
    """An event declared inside a tracking plan"""

    name: str = ""
    type: str = DEFAULT_EVENT_TYPE
    description: str = ""
    additional_properties: bool = Field(False, alias="additionalProperties")
    properties: list[TrackingPlanPropertySpec] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('name', 'description')
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator('type')
    @classmethod
    def default_type(cls, v: str) -> str:
        return v.strip() or DEFAULT_EVENT_TYPE


class TrackingPlanCreate(BaseModel):
    """
    Full tracking plan definition.

    Used for both create and update: an update replaces the whole
    binding set, so it carries the same payload.
    """

    name: str = ""
    description: str = ""
    events: list[TrackingPlanEventSpec] = Field(default_factory=list)

    @field_validator('name', 'description')
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class TrackingPlanUpdate(TrackingPlanCreate):
    pass


class TrackingPlanPropertyResponse(BaseModel):
    id: int
    property_id: int
    required: bool
    property: PropertyResponse

    model_config = {"from_attributes": True}


class TrackingPlanEventResponse(BaseModel):
    id: int
    event_id: int
    additional_properties: bool = Field(serialization_alias="additionalProperties")
    event: EventResponse
    properties: list[TrackingPlanPropertyResponse]

    model_config = {"from_attributes": True}


class TrackingPlanResponse(BaseModel):
    """Full plan graph: plan, its event bindings and their property bindings"""

    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
    events: list[TrackingPlanEventResponse]

    model_config = {"from_attributes": True}
