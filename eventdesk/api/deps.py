"""
API dependency helpers.

Provides the dependency-resolved user context and role guards for routes.
"""
from typing import Any, Dict, Optional, Tuple

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from eventdesk.api.auth import build_user_context, get_or_create_dev_user, resolve_identity_from_headers
from eventdesk.db.database import get_db
from eventdesk.db.repositories import users as user_repo
from eventdesk.services.errors import ServiceError
from eventdesk.utils.role_permissions import ROLE_ORGANIZER, ROLE_VOLUNTEER, role_allows, role_satisfies
from eventdesk.utils.runtime import dev_mode_active

FORBIDDEN_DETAIL = "You don't have permission to access this page."
USER_NOT_FOUND_DETAIL = "User not found. Please sign up first."

# Contract:
# Returns (sqlalchemy User model, current_user_context_dict)
# Raises 401 if identity cannot be resolved or the user never signed up.

def get_current_user_context(
    db: Session = Depends(get_db),
    x_auth_request_user: Optional[str] = Header(default=None),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> Tuple[Any, Dict[str, Any]]:
    if dev_mode_active():
        user = get_or_create_dev_user(db)
        return user, build_user_context(user)

    _name, email = resolve_identity_from_headers(
        x_auth_request_user=x_auth_request_user,
        x_auth_request_email=x_auth_request_email,
        x_forwarded_user=x_forwarded_user,
        x_forwarded_email=x_forwarded_email,
    )
    if not email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    user = user_repo.get_user_by_email(db, email)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=USER_NOT_FOUND_DETAIL)
    return user, build_user_context(user)


def require_role(required_role: str):
    """Route guard: the user's role must equal ``required_role`` or be organizer."""

    def _guard(user_context=Depends(get_current_user_context)) -> Tuple[Any, Dict[str, Any]]:
        user, _ctx = user_context
        if not role_satisfies(user.role, required_role):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_DETAIL)
        return user_context

    return _guard


def require_capability(capability: str):
    """Route guard: the user's role must grant ``capability``."""

    def _guard(user_context=Depends(get_current_user_context)) -> Tuple[Any, Dict[str, Any]]:
        user, _ctx = user_context
        if not role_allows(user.role, capability):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_DETAIL)
        return user_context

    return _guard


require_staff = require_role(ROLE_VOLUNTEER)
require_organizer = require_role(ROLE_ORGANIZER)


def http_error(exc: ServiceError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.detail)
