"""
Check-in service: validates a scanned QR code and checks the attendee in.

Rules, in order:
- the code must exist,
- it must belong to the event being scanned for (when one is given),
- it must not have been used,
- the attendee must not already be checked in.

The state change itself is a conditional update, so a code scanned at two
desks at once checks the attendee in exactly once.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from eventdesk.db import models
from eventdesk.db.repositories import events as event_repo
from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.db.repositories import users as user_repo
from eventdesk.services.errors import (
    AlreadyCheckedInError,
    CheckInError,
    InvalidQRCodeError,
    QRCodeAlreadyUsedError,
    QRCodeNotFoundError,
    WrongEventError,
)

logger = logging.getLogger(__name__)


@dataclass
class CheckInResult:
    registration: models.Registration
    attendee: models.User
    event: models.Event


class CheckInService:

    def __init__(self, db: Session):
        self.db = db

    def check_in(
        self,
        qr_code: str,
        *,
        event_id: Optional[uuid.UUID] = None,
        scanned_by: Optional[uuid.UUID] = None,
    ) -> CheckInResult:
        code = (qr_code or "").strip()
        if not code:
            raise InvalidQRCodeError()

        registration = registration_repo.get_registration_by_qr_code(self.db, code)
        if not registration:
            raise QRCodeNotFoundError()

        if event_id is not None and registration.event_id != event_id:
            raise WrongEventError()

        self._ensure_unused(registration)

        if not registration_repo.mark_checked_in(self.db, registration.id, checked_in_by=scanned_by):
            # Another scan won between our read and the update.
            self.db.refresh(registration)
            self._ensure_unused(registration)
            raise QRCodeAlreadyUsedError()

        self.db.refresh(registration)
        attendee = user_repo.get_user(self.db, registration.user_id)
        event = event_repo.get_event(self.db, registration.event_id)
        if attendee is None or event is None:
            raise CheckInError("Registration references a missing attendee or event")

        logger.info("Checked in registration=%s event=%s by=%s", registration.id, registration.event_id, scanned_by)
        return CheckInResult(registration=registration, attendee=attendee, event=event)

    @staticmethod
    def _ensure_unused(registration: models.Registration) -> None:
        if registration.qr_used:
            raise QRCodeAlreadyUsedError()
        if registration.checked_in:
            raise AlreadyCheckedInError()


def check_in(
    db: Session,
    qr_code: str,
    *,
    event_id: Optional[uuid.UUID] = None,
    scanned_by: Optional[uuid.UUID] = None,
) -> CheckInResult:
    return CheckInService(db).check_in(qr_code, event_id=event_id, scanned_by=scanned_by)
