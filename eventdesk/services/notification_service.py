"""
Attendee notifications.

Sends the registration confirmation carrying the QR ticket and records the
delivery outcome on the registration (``confirmation_email_status``).
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventdesk.db.repositories import events as event_repo
from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.db.repositories import users as user_repo
from eventdesk.services.email_service import EmailService, get_email_service
from eventdesk.services.qr_service import render_qr_png
from eventdesk.utils.feature_flags import email_notifications_enabled
from eventdesk.utils.urls import build_ticket_link

logger = logging.getLogger(__name__)

TEMPLATE_REGISTRATION_CONFIRMATION = "registration_confirmation"


class NotificationService:
    """Service for attendee-facing emails."""

    def __init__(self, db: Session, email_service: Optional[EmailService] = None):
        self.db = db
        self.email_service = email_service or get_email_service()

    def send_registration_confirmation(self, registration_id: uuid.UUID) -> Dict[str, Any]:
        registration = registration_repo.get_registration(self.db, registration_id)
        if not registration:
            logger.warning("Confirmation requested for unknown registration %s", registration_id)
            return {'success': False, 'error': 'Registration not found'}

        if not email_notifications_enabled():
            registration_repo.set_confirmation_email_status(self.db, registration.id, 'skipped')
            return {'success': False, 'skipped': True}

        user = user_repo.get_user(self.db, registration.user_id)
        event = event_repo.get_event(self.db, registration.event_id)
        if not user or not event:
            registration_repo.set_confirmation_email_status(self.db, registration.id, 'failed')
            return {'success': False, 'error': 'Attendee or event missing'}

        context = {
            'attendee_name': user.name,
            'event_name': event.name,
            'event_date': event.date,
            'event_location': event.location,
            'qr_code': registration.qr_code,
            'ticket_url': build_ticket_link(registration_id=str(registration.id), email=user.email),
        }
        try:
            html_content, text_content = self.email_service.render_template(
                TEMPLATE_REGISTRATION_CONFIRMATION, context
            )
        except Exception as e:
            logger.error("Could not render confirmation email for %s: %s", registration.id, e)
            registration_repo.set_confirmation_email_status(self.db, registration.id, 'failed')
            return {'success': False, 'error': str(e)}

        attachment = {
            'filename': f"ticket-{registration.id.hex}.png",
            'content': render_qr_png(registration.qr_code),
            'mime_type': 'image/png',
        }
        result = asyncio.run(self.email_service.send_email(
            to_email=user.email,
            subject=f"Your QR code for {event.name}",
            html_content=html_content,
            text_content=text_content,
            attachments=[attachment],
        ))
        status = 'sent' if result.get('success') else 'failed'
        registration_repo.set_confirmation_email_status(self.db, registration.id, status)
        if status == 'sent':
            logger.info("Confirmation email sent for registration %s", registration.id)
        else:
            logger.warning("Confirmation email failed for registration %s: %s", registration.id, result.get('error'))
        return result


def _mark_failed(db: Session, registration_id: uuid.UUID) -> None:
    try:
        registration_repo.set_confirmation_email_status(db, registration_id, 'failed')
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not record failed confirmation for %s", registration_id)


def deliver_registration_confirmation(registration_id: uuid.UUID) -> Dict[str, Any]:
    """Background-task entry point: runs with its own session."""
    from eventdesk.db.database import SessionLocal

    db = SessionLocal()
    try:
        return NotificationService(db).send_registration_confirmation(registration_id)
    except Exception:
        db.rollback()
        logger.exception("Unexpected error delivering confirmation for %s", registration_id)
        _mark_failed(db, registration_id)
        return {'success': False, 'error': 'unexpected error'}
    finally:
        db.close()
