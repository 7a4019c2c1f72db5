"""
Authentication helpers and identity resolution.

Parses proxy headers, normalizes emails, and provisions the development
organizer when DEV_MODE is active. Users otherwise exist only after signup.
"""
from typing import Optional, Tuple
from sqlalchemy.orm import Session

from eventdesk.db import models, schemas
from eventdesk.db.repositories import users as user_repo
from eventdesk.utils.role_permissions import ROLE_ORGANIZER
from eventdesk.utils.runtime import DEV_USER_EMAIL, DEV_USER_NAME


def resolve_identity_from_headers(
    x_auth_request_user: Optional[str],
    x_auth_request_email: Optional[str],
    x_forwarded_user: Optional[str],
    x_forwarded_email: Optional[str],
) -> Tuple[Optional[str], Optional[str]]:
    user = x_auth_request_user or x_forwarded_user
    email = user_repo.normalize_email(x_auth_request_email or x_forwarded_email)
    return user, email


def get_or_create_dev_user(db: Session) -> models.User:
    user = user_repo.get_user_by_email(db, DEV_USER_EMAIL)
    if user:
        return user
    return user_repo.create_user(
        db,
        schemas.UserCreate(name=DEV_USER_NAME, email=DEV_USER_EMAIL, role=ROLE_ORGANIZER),
    )


def build_user_context(user: models.User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
    }
