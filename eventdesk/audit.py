"""
Audit logging helpers and enums.

Centralized helpers to persist normalized audit records with consistent
schema; includes convenience wrappers per target type.
"""
from __future__ import annotations
import logging
import uuid
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from eventdesk.db import schemas
from eventdesk.db.repositories import audits as audit_repo

logger = logging.getLogger(__name__)


class AuditAction(str, Enum):
    # Accounts
    USER_SIGNUP = "user_signup"
    USER_UPDATE = "user_update"
    # Events
    EVENT_CREATE = "event_create"
    EVENT_UPDATE = "event_update"
    EVENT_ACTIVATE = "event_activate"
    EVENT_DEACTIVATE = "event_deactivate"
    # Registrations
    REGISTRATION_CREATE = "registration_create"
    # Check-in
    CHECKIN = "checkin"
    # Exports
    ATTENDANCE_EXPORT = "attendance_export"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[uuid.UUID] = None,
    actor_user_id: Optional[uuid.UUID] = None,
    event_id: Optional[uuid.UUID] = None,
    reason: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> schemas.AuditLog:
    """Central audit logging helper.

    Persists pure string values for action and status, never Enum reprs.
    """
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        reason=reason,
        metadata=metadata or {},
    )
    return audit_repo.create_audit_log(
        db,
        audit_log=audit_log,
        actor_user_id=actor_user_id,
        event_id=event_id,
    )


def safe_log(db: Session, **kwargs):
    """Like :func:`log` but never lets an audit failure break the request."""
    try:
        return log(db, **kwargs)
    except Exception:
        db.rollback()
        logger.warning("audit write failed for action=%s", kwargs.get("action"), exc_info=True)
        return None


__all__ = ["AuditAction", "AuditStatus", "log", "safe_log"]


def log_event(db: Session, *, actor_user_id: uuid.UUID, event_id: uuid.UUID, action: AuditAction, name: Optional[str] = None, status: AuditStatus | str = AuditStatus.SUCCESS):
    return safe_log(
        db,
        action=action,
        status=status,
        target_type="event",
        target_id=event_id,
        actor_user_id=actor_user_id,
        event_id=event_id,
        metadata={"name": name} if name else None,
    )


def log_registration(db: Session, *, actor_user_id: Optional[uuid.UUID], event_id: uuid.UUID, registration_id: uuid.UUID, attendee_email: Optional[str] = None):
    return safe_log(
        db,
        action=AuditAction.REGISTRATION_CREATE,
        status=AuditStatus.SUCCESS,
        target_type="registration",
        target_id=registration_id,
        actor_user_id=actor_user_id,
        event_id=event_id,
        metadata={"attendee_email": attendee_email} if attendee_email else None,
    )


def log_checkin(
    db: Session,
    *,
    actor_user_id: Optional[uuid.UUID],
    event_id: Optional[uuid.UUID],
    registration_id: Optional[uuid.UUID],
    status: AuditStatus | str = AuditStatus.SUCCESS,
    reason: Optional[str] = None,
    qr_code: Optional[str] = None,
):
    return safe_log(
        db,
        action=AuditAction.CHECKIN,
        status=status,
        target_type="registration",
        target_id=registration_id,
        actor_user_id=actor_user_id,
        event_id=event_id,
        reason=reason,
        metadata={"qr_code": qr_code} if qr_code else None,
    )


__all__.extend(["log_event", "log_registration", "log_checkin"])
