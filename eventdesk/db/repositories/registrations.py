"""
Registration repository functions.

Includes the one-time-use check-in write: a conditional UPDATE that only
succeeds while the QR code is still unused.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple
from sqlalchemy import case, func, update
from sqlalchemy.orm import Session

from eventdesk.db import models
from eventdesk.db.models import now_utc

EMAIL_STATUSES = ("pending", "sent", "failed", "skipped")


def build_qr_payload(event_id: uuid.UUID, user_id: uuid.UUID, registration_id: uuid.UUID) -> str:
    return f"event-{event_id.hex}-user-{user_id.hex}-reg-{registration_id.hex}"


def create_registration(db: Session, *, user_id: uuid.UUID, event_id: uuid.UUID) -> models.Registration:
    registration_id = uuid.uuid4()
    db_registration = models.Registration(
        id=registration_id,
        user_id=user_id,
        event_id=event_id,
        qr_code=build_qr_payload(event_id, user_id, registration_id),
        registered_at=now_utc(),
        checked_in=False,
        qr_used=False,
        confirmation_email_status="pending",
    )
    db.add(db_registration)
    db.commit()
    db.refresh(db_registration)
    return db_registration


def get_registration(db: Session, registration_id: uuid.UUID) -> Optional[models.Registration]:
    return db.query(models.Registration).filter(models.Registration.id == registration_id).first()


def get_registration_by_qr_code(db: Session, qr_code: str) -> Optional[models.Registration]:
    return db.query(models.Registration).filter(models.Registration.qr_code == qr_code).first()


def get_registration_for_user_event(db: Session, user_id: uuid.UUID, event_id: uuid.UUID) -> Optional[models.Registration]:
    return (
        db.query(models.Registration)
        .filter(
            models.Registration.user_id == user_id,
            models.Registration.event_id == event_id,
        )
        .first()
    )


def list_registrations_by_event(
    db: Session,
    event_id: uuid.UUID,
    *,
    checked_in: Optional[bool] = None,
) -> List[models.Registration]:
    q = db.query(models.Registration).filter(models.Registration.event_id == event_id)
    if checked_in is not None:
        q = q.filter(models.Registration.checked_in.is_(checked_in))
    return q.order_by(models.Registration.registered_at.asc()).all()


def list_registrations_by_user(db: Session, user_id: uuid.UUID) -> List[models.Registration]:
    return (
        db.query(models.Registration)
        .filter(models.Registration.user_id == user_id)
        .order_by(models.Registration.registered_at.desc())
        .all()
    )


def list_event_ids_for_user(db: Session, user_id: uuid.UUID) -> List[uuid.UUID]:
    rows = (
        db.query(models.Registration.event_id)
        .filter(models.Registration.user_id == user_id)
        .all()
    )
    return [row[0] for row in rows]


def mark_checked_in(
    db: Session,
    registration_id: uuid.UUID,
    *,
    checked_in_by: Optional[uuid.UUID] = None,
    when: Optional[datetime] = None,
) -> bool:
    """Flip the registration to checked-in if and only if its QR code is unused.

    Returns True when this call performed the transition, False when another
    scan got there first (or the registration was already checked in).
    """
    result = db.execute(
        update(models.Registration)
        .where(
            models.Registration.id == registration_id,
            models.Registration.qr_used.is_(False),
            models.Registration.checked_in.is_(False),
        )
        .values(
            checked_in=True,
            checked_in_at=when or now_utc(),
            checked_in_by=checked_in_by,
            qr_used=True,
        )
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount == 1


def set_confirmation_email_status(db: Session, registration_id: uuid.UUID, status: str) -> bool:
    if status not in EMAIL_STATUSES:
        raise ValueError(f"Invalid email status '{status}'. Allowed: {list(EMAIL_STATUSES)}")
    db_registration = get_registration(db, registration_id)
    if not db_registration:
        return False
    db_registration.confirmation_email_status = status
    db.commit()
    return True


def count_registrations_by_event(db: Session, event_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, Tuple[int, int]]:
    """Return ``{event_id: (registered, checked_in)}`` for the given events."""
    ids = list(event_ids)
    if not ids:
        return {}
    rows = (
        db.query(
            models.Registration.event_id,
            func.count(models.Registration.id),
            func.sum(case((models.Registration.checked_in.is_(True), 1), else_=0)),
        )
        .filter(models.Registration.event_id.in_(ids))
        .group_by(models.Registration.event_id)
        .all()
    )
    counts = {event_id: (0, 0) for event_id in ids}
    for event_id, total, checked in rows:
        counts[event_id] = (int(total or 0), int(checked or 0))
    return counts
