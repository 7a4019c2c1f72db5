"""
Check-in endpoint used by the scanner desk.

Every scan is audited, successful or not.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventdesk.api.deps import http_error, require_capability
from eventdesk.audit import AuditStatus, log_checkin
from eventdesk.db import schemas
from eventdesk.db.database import get_db
from eventdesk.db.repositories import events as event_repo
from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.services.checkin_service import CheckInService
from eventdesk.services.errors import CheckInError
from eventdesk.utils.role_permissions import CAN_CHECK_IN

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkin", tags=["checkin"])


@router.post("", response_model=schemas.CheckInResponse)
def check_in(
    payload: schemas.CheckInRequest,
    db: Session = Depends(get_db),
    user_context=Depends(require_capability(CAN_CHECK_IN)),
):
    user, _ctx = user_context
    qr_code = (payload.qr_code or "").strip()
    try:
        result = CheckInService(db).check_in(qr_code, event_id=payload.event_id, scanned_by=user.id)
    except CheckInError as e:
        registration = registration_repo.get_registration_by_qr_code(db, qr_code) if qr_code else None
        scanned_event = event_repo.get_event(db, payload.event_id) if payload.event_id else None
        logger.warning("Check-in rejected (%s) by %s", e.reason, user.id)
        log_checkin(
            db,
            actor_user_id=user.id,
            event_id=scanned_event.id if scanned_event else (registration.event_id if registration else None),
            registration_id=registration.id if registration else None,
            status=AuditStatus.FAILURE,
            reason=e.reason,
            qr_code=qr_code or None,
        )
        raise http_error(e)

    log_checkin(
        db,
        actor_user_id=user.id,
        event_id=result.event.id,
        registration_id=result.registration.id,
        qr_code=qr_code,
    )
    return schemas.CheckInResponse(
        registration=schemas.Registration.model_validate(result.registration, from_attributes=True),
        attendee=schemas.User.model_validate(result.attendee, from_attributes=True),
        event=schemas.Event.model_validate(result.event, from_attributes=True),
        message=f"{result.attendee.name} checked in successfully",
    )
