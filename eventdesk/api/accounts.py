"""
Account endpoints: signup, login and the current identity.

Login only confirms that an email is known; the client then identifies itself
on later requests with the proxy email header.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from eventdesk.api.deps import USER_NOT_FOUND_DETAIL, get_current_user_context
from eventdesk.audit import AuditAction, AuditStatus, safe_log
from eventdesk.db import schemas
from eventdesk.db.database import get_db
from eventdesk.db.repositories import users as user_repo
from eventdesk.services.registration_service import RegistrationService, is_valid_email
from eventdesk.utils.feature_flags import organizer_signup_enabled
from eventdesk.utils.role_permissions import ROLE_ORGANIZER, validate_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _validate_email(email: str) -> str:
    email = (email or "").strip()
    if not email:
        raise HTTPException(status_code=422, detail="Email is required")
    if not is_valid_email(email):
        raise HTTPException(status_code=422, detail="Please enter a valid email address")
    return email


def build_profile(db: Session, user) -> schemas.UserProfile:
    profile = schemas.UserProfile.model_validate(user, from_attributes=True)
    profile.event_ids = RegistrationService(db).event_ids_for_user(user.id)
    return profile


@router.post("/signup", response_model=schemas.UserProfile, status_code=status.HTTP_201_CREATED)
def signup(payload: schemas.SignupRequest, db: Session = Depends(get_db)):
    email = _validate_email(payload.email)
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=422, detail="Name is required for signup")
    role = (payload.role or "").strip().lower()
    try:
        validate_role(role)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if role == ROLE_ORGANIZER and not organizer_signup_enabled():
        raise HTTPException(status_code=403, detail="Organizer signup is disabled")
    if user_repo.get_user_by_email(db, email):
        raise HTTPException(status_code=409, detail="User already exists. Please login instead.")

    user = user_repo.create_user(
        db, schemas.UserCreate(name=name, email=email, phone=payload.phone, role=role)
    )
    logger.info("New %s account %s", role, user.id)
    safe_log(
        db,
        action=AuditAction.USER_SIGNUP,
        status=AuditStatus.SUCCESS,
        target_type="user",
        target_id=user.id,
        actor_user_id=user.id,
        metadata={"role": role},
    )
    return build_profile(db, user)


@router.post("/login", response_model=schemas.UserProfile)
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    email = _validate_email(payload.email)
    user = user_repo.get_user_by_email(db, email)
    if not user:
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND_DETAIL)
    return build_profile(db, user)


@router.get("/me", response_model=schemas.UserProfile)
def me(
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    return build_profile(db, user)
