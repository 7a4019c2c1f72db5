import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from .events import Event
from .users import User


class RegistrationCreate(BaseModel):
    """Registration form payload. Fields are validated by the registration service."""
    name: str = ""
    email: str = ""
    phone: str = ""
    event_id: Optional[uuid.UUID] = None


class Registration(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    event_id: uuid.UUID
    qr_code: str
    registered_at: datetime
    checked_in: bool
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[uuid.UUID] = None
    qr_used: bool
    confirmation_email_status: str
    model_config = ConfigDict(from_attributes=True)


class RegistrationWithQRCode(Registration):
    """Returned right after registering: includes the rendered QR image."""
    qr_code_image: str


class AttendeeSummary(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    phone: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class RegistrationWithAttendee(Registration):
    attendee: Optional[AttendeeSummary] = None


class CheckInRequest(BaseModel):
    qr_code: str = ""
    event_id: Optional[uuid.UUID] = None


class CheckInResponse(BaseModel):
    registration: Registration
    attendee: User
    event: Event
    message: str = "Check-in successful"
