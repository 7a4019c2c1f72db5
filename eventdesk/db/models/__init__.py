"""
Domain-split SQLAlchemy models with a single import surface.

Exposes `Base`, `now_utc`, and all ORM classes.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .users import User
from .events import Event
from .registrations import Registration
from .audit import AuditLog

__all__ = [
    # base
    "Base",
    "now_utc",
    # people and events
    "User",
    "Event",
    "Registration",
    # audit
    "AuditLog",
]
