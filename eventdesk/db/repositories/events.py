"""
Event repository functions.
"""
from __future__ import annotations

import uuid
from typing import List, Optional
from sqlalchemy.orm import Session

from eventdesk.db import schemas, models


def create_event(db: Session, event: schemas.EventCreate, organizer_id: uuid.UUID) -> models.Event:
    db_event = models.Event(
        name=event.name.strip(),
        description=(event.description or "").strip(),
        date=event.date or "",
        location=(event.location or "").strip(),
        organizer_id=organizer_id,
        is_active=True,
    )
    db.add(db_event)
    db.commit()
    db.refresh(db_event)
    return db_event


def get_event(db: Session, event_id: uuid.UUID) -> Optional[models.Event]:
    return db.query(models.Event).filter(models.Event.id == event_id).first()


def list_events(db: Session, skip: int = 0, limit: int = 100) -> List[models.Event]:
    return (
        db.query(models.Event)
        .order_by(models.Event.created_at.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_events_by_organizer(db: Session, organizer_id: uuid.UUID) -> List[models.Event]:
    return (
        db.query(models.Event)
        .filter(models.Event.organizer_id == organizer_id)
        .order_by(models.Event.created_at.asc())
        .all()
    )


def list_active_events(db: Session) -> List[models.Event]:
    return (
        db.query(models.Event)
        .filter(models.Event.is_active.is_(True))
        .order_by(models.Event.created_at.asc())
        .all()
    )


def update_event(db: Session, event_id: uuid.UUID, event: schemas.EventUpdate) -> Optional[models.Event]:
    db_event = get_event(db, event_id)
    if db_event:
        update_data = event.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            if value is None:
                continue
            if isinstance(value, str) and key != "date":
                value = value.strip()
            setattr(db_event, key, value)
        db.commit()
        db.refresh(db_event)
    return db_event
