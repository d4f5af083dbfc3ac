from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import ApplicationStatus, EventType

class ApplicationIn(BaseModel):
    program_id: int = Field(gt=0)

class ApplicationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    program_id: int
    status: ApplicationStatus
    created_at: datetime | None = None

class EventIn(BaseModel):
    program_id: int = Field(gt=0)
    type: EventType = EventType.VIEW
    metadata: dict = Field(default_factory=dict)

    @field_validator("type")
    @classmethod
    def _not_apply(cls, v: EventType) -> EventType:
        # APPLY events are only written together with their application
        if v == EventType.APPLY:
            raise ValueError("APPLY events are recorded by POST /applications")
        return v

class EventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    program_id: int
    type: EventType
    created_at: datetime | None = None

class FunnelRow(BaseModel):
    status: ApplicationStatus
    count: int
