import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class UserBase(BaseModel):
    name: str
    email: str
    phone: str | None = None


class UserCreate(UserBase):
    role: str = "participant"


class UserUpdate(BaseModel):
    name: str | None = None
    phone: str | None = None


class User(UserBase):
    id: uuid.UUID
    role: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class SignupRequest(BaseModel):
    name: str = ""
    email: str = ""
    role: str = "participant"
    phone: str | None = None


class LoginRequest(BaseModel):
    email: str = ""


class UserProfile(User):
    """User plus the ids of the events they are associated with."""
    event_ids: list[uuid.UUID] = []
