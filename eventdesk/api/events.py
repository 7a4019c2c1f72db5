"""
Event API endpoints.

Organizers manage the events they created; everyone else sees active events.
"""
from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from eventdesk.api.deps import FORBIDDEN_DETAIL, get_current_user_context, require_capability, require_staff
from eventdesk.audit import AuditAction, log_event
from eventdesk.db import models, schemas
from eventdesk.db.database import get_db
from eventdesk.db.repositories import events as event_repo
from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.db.repositories import users as user_repo
from eventdesk.utils.role_permissions import CAN_MANAGE_EVENTS, ROLE_ORGANIZER, role_allows_manage

router = APIRouter(prefix="/events", tags=["events"])


def visible_events(db: Session, user: models.User) -> List[models.Event]:
    if role_allows_manage(user.role):
        return event_repo.list_events_by_organizer(db, user.id)
    return event_repo.list_active_events(db)


def get_event_or_404(db: Session, event_id: uuid.UUID, user: models.User) -> models.Event:
    """Load an event the caller may see; inactive events are hidden from non-organizers."""
    event = event_repo.get_event(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    if not event.is_active and user.role != ROLE_ORGANIZER:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def ensure_event_owner(event: models.Event, user: models.User) -> None:
    if user.role == ROLE_ORGANIZER and event.organizer_id != user.id:
        raise HTTPException(status_code=403, detail=FORBIDDEN_DETAIL)


@router.get("", response_model=List[schemas.Event])
def list_events(
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    return visible_events(db, user)


@router.post("", response_model=schemas.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: schemas.EventCreate,
    db: Session = Depends(get_db),
    user_context=Depends(require_capability(CAN_MANAGE_EVENTS)),
):
    user, _ctx = user_context
    if not (payload.name or "").strip():
        raise HTTPException(status_code=422, detail="Event name is required")
    event = event_repo.create_event(db, payload, organizer_id=user.id)
    log_event(db, actor_user_id=user.id, event_id=event.id, action=AuditAction.EVENT_CREATE, name=event.name)
    return event


@router.get("/{event_id}", response_model=schemas.Event)
def get_event(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    return get_event_or_404(db, event_id, user)


@router.patch("/{event_id}", response_model=schemas.Event)
def update_event(
    event_id: uuid.UUID,
    payload: schemas.EventUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(require_capability(CAN_MANAGE_EVENTS)),
):
    user, _ctx = user_context
    event = get_event_or_404(db, event_id, user)
    if event.organizer_id != user.id:
        raise HTTPException(status_code=403, detail=FORBIDDEN_DETAIL)
    if payload.name is not None and not payload.name.strip():
        raise HTTPException(status_code=422, detail="Event name is required")

    was_active = event.is_active
    event = event_repo.update_event(db, event.id, payload)
    if payload.is_active is not None and payload.is_active != was_active:
        action = AuditAction.EVENT_ACTIVATE if event.is_active else AuditAction.EVENT_DEACTIVATE
    else:
        action = AuditAction.EVENT_UPDATE
    log_event(db, actor_user_id=user.id, event_id=event.id, action=action, name=event.name)
    return event


@router.get("/{event_id}/registrations", response_model=List[schemas.RegistrationWithAttendee])
def list_event_registrations(
    event_id: uuid.UUID,
    checked_in: Optional[bool] = None,
    db: Session = Depends(get_db),
    user_context=Depends(require_staff),
):
    user, _ctx = user_context
    event = get_event_or_404(db, event_id, user)
    ensure_event_owner(event, user)
    registrations = registration_repo.list_registrations_by_event(db, event.id, checked_in=checked_in)
    attendees = {u.id: u for u in user_repo.list_users_by_ids(db, [r.user_id for r in registrations])}
    result = []
    for registration in registrations:
        item = schemas.RegistrationWithAttendee.model_validate(registration, from_attributes=True)
        attendee = attendees.get(registration.user_id)
        if attendee is not None:
            item.attendee = schemas.AttendeeSummary.model_validate(attendee, from_attributes=True)
        result.append(item)
    return result
