import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class EventBase(BaseModel):
    name: str
    description: str = ""
    date: str = ""
    location: str = ""


class EventCreate(EventBase):
    pass


class EventUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    date: str | None = None
    location: str | None = None
    is_active: bool | None = None


class Event(EventBase):
    id: uuid.UUID
    organizer_id: uuid.UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
