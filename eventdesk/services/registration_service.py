"""
Registration service: turns the registration form into a stored registration
with a one-time QR code.
"""
from __future__ import annotations

import logging
import re
import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventdesk.db import models, schemas
from eventdesk.db.repositories import events as event_repo
from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.db.repositories import users as user_repo
from eventdesk.services.errors import (
    DuplicateRegistrationError,
    EventNotFoundError,
    RegistrationClosedError,
    RegistrationError,
)
from eventdesk.utils.role_permissions import ROLE_PARTICIPANT

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


class RegistrationService:
    """Registers attendees for events."""

    def __init__(self, db: Session):
        self.db = db

    def register_attendee(self, data: schemas.RegistrationCreate) -> models.Registration:
        name = (data.name or "").strip()
        email = (data.email or "").strip()
        phone = (data.phone or "").strip()
        if not name or not email or not phone or not data.event_id:
            raise RegistrationError("All fields are required and an event must be selected")
        if not is_valid_email(email):
            raise RegistrationError("Please enter a valid email address")

        event = event_repo.get_event(self.db, data.event_id)
        if not event:
            raise EventNotFoundError()
        if not event.is_active:
            raise RegistrationClosedError()

        user = self._find_or_create_attendee(name=name, email=email, phone=phone)

        if registration_repo.get_registration_for_user_event(self.db, user.id, event.id):
            raise DuplicateRegistrationError()

        try:
            registration = registration_repo.create_registration(self.db, user_id=user.id, event_id=event.id)
        except IntegrityError:
            # Lost a race against a concurrent registration for the same attendee.
            self.db.rollback()
            raise DuplicateRegistrationError()

        logger.info("Registered user=%s for event=%s (registration=%s)", user.id, event.id, registration.id)
        return registration

    def _find_or_create_attendee(self, *, name: str, email: str, phone: str) -> models.User:
        user = user_repo.get_user_by_email(self.db, email)
        if user:
            if not user.phone:
                user_repo.update_user(self.db, user.id, schemas.UserUpdate(phone=phone))
            return user
        try:
            return user_repo.create_user(
                self.db,
                schemas.UserCreate(name=name, email=email, phone=phone, role=ROLE_PARTICIPANT),
            )
        except IntegrityError:
            # A concurrent first registration created this attendee already.
            self.db.rollback()
            user = user_repo.get_user_by_email(self.db, email)
            if not user:
                raise
            return user

    def event_ids_for_user(self, user_id: uuid.UUID) -> list[uuid.UUID]:
        """Events a user is associated with: registered for, plus organized."""
        ids = list(registration_repo.list_event_ids_for_user(self.db, user_id))
        for event in event_repo.list_events_by_organizer(self.db, user_id):
            if event.id not in ids:
                ids.append(event.id)
        return ids


def register_attendee(db: Session, data: schemas.RegistrationCreate) -> models.Registration:
    return RegistrationService(db).register_attendee(data)
