"""
Domain-split Pydantic schemas with a single import surface.
"""

from .users import UserBase, UserCreate, UserUpdate, User, SignupRequest, LoginRequest, UserProfile
from .events import EventBase, EventCreate, EventUpdate, Event
from .registrations import (
    RegistrationCreate,
    Registration,
    RegistrationWithQRCode,
    AttendeeSummary,
    RegistrationWithAttendee,
    CheckInRequest,
    CheckInResponse,
)
from .stats import HourCount, EventStats, EventSummary, DashboardSummary
from .audits import AuditLogBase, AuditLogCreate, AuditLog

__all__ = [
    # Users
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "User",
    "SignupRequest",
    "LoginRequest",
    "UserProfile",
    # Events
    "EventBase",
    "EventCreate",
    "EventUpdate",
    "Event",
    # Registrations / check-in
    "RegistrationCreate",
    "Registration",
    "RegistrationWithQRCode",
    "AttendeeSummary",
    "RegistrationWithAttendee",
    "CheckInRequest",
    "CheckInResponse",
    # Stats
    "HourCount",
    "EventStats",
    "EventSummary",
    "DashboardSummary",
    # Audits
    "AuditLogBase",
    "AuditLogCreate",
    "AuditLog",
]
