"""
Registration API endpoints.

Registering returns the QR ticket straight away; the confirmation email is
delivered after the response as a background task.
"""
import logging
import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from eventdesk.api.deps import FORBIDDEN_DETAIL, get_current_user_context, http_error
from eventdesk.audit import log_registration
from eventdesk.db import models, schemas
from eventdesk.db.database import get_db
from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.db.repositories import users as user_repo
from eventdesk.services.errors import ServiceError
from eventdesk.services.notification_service import deliver_registration_confirmation
from eventdesk.services.qr_service import render_qr_data_uri, render_qr_png
from eventdesk.services.registration_service import RegistrationService
from eventdesk.utils.role_permissions import role_allows_check_in

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/registrations", tags=["registrations"])


def _get_visible_registration(db: Session, registration_id: uuid.UUID, user: models.User) -> models.Registration:
    registration = registration_repo.get_registration(db, registration_id)
    if not registration:
        raise HTTPException(status_code=404, detail="Registration not found")
    if registration.user_id != user.id and not role_allows_check_in(user.role):
        raise HTTPException(status_code=403, detail=FORBIDDEN_DETAIL)
    return registration


@router.post("", response_model=schemas.RegistrationWithQRCode, status_code=status.HTTP_201_CREATED)
def register(
    payload: schemas.RegistrationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    try:
        registration = RegistrationService(db).register_attendee(payload)
    except ServiceError as e:
        logger.info("Registration rejected for %s: %s", payload.email, e.detail)
        raise http_error(e)

    attendee = user_repo.get_user(db, registration.user_id)
    log_registration(
        db,
        actor_user_id=user.id,
        event_id=registration.event_id,
        registration_id=registration.id,
        attendee_email=attendee.email if attendee else None,
    )
    background_tasks.add_task(deliver_registration_confirmation, registration.id)

    return schemas.RegistrationWithQRCode(
        **schemas.Registration.model_validate(registration, from_attributes=True).model_dump(),
        qr_code_image=render_qr_data_uri(registration.qr_code),
    )


@router.get("/{registration_id}", response_model=schemas.RegistrationWithQRCode)
def get_registration(
    registration_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    registration = _get_visible_registration(db, registration_id, user)
    return schemas.RegistrationWithQRCode(
        **schemas.Registration.model_validate(registration, from_attributes=True).model_dump(),
        qr_code_image=render_qr_data_uri(registration.qr_code),
    )


@router.get("/{registration_id}/qr.png")
def get_registration_qr_png(
    registration_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    registration = _get_visible_registration(db, registration_id, user)
    return Response(
        content=render_qr_png(registration.qr_code),
        media_type="image/png",
        headers={"Content-Disposition": f'inline; filename="ticket-{registration.id.hex}.png"'},
    )
