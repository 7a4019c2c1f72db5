"""
Users API endpoints.

Self-profile read/update and the participant's own tickets.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from eventdesk.api.accounts import build_profile
from eventdesk.api.deps import get_current_user_context
from eventdesk.audit import AuditAction, AuditStatus, safe_log
from eventdesk.db import schemas
from eventdesk.db.database import get_db
from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.db.repositories import users as user_repo

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=schemas.UserProfile)
def get_me(
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    return build_profile(db, user)


@router.patch("/me", response_model=schemas.User)
def update_me(
    payload: schemas.UserUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    if payload.name is not None:
        s = payload.name.strip()
        if len(s) == 0 or len(s) > 120:
            raise HTTPException(status_code=422, detail="name must be 1..120 characters")
        payload.name = s
    if payload.phone is not None:
        payload.phone = payload.phone.strip() or None

    updated = user_repo.update_user(db, user.id, payload)
    safe_log(
        db,
        action=AuditAction.USER_UPDATE,
        status=AuditStatus.SUCCESS,
        target_type="user",
        target_id=user.id,
        actor_user_id=user.id,
        metadata={"fields": sorted(payload.model_dump(exclude_unset=True).keys())},
    )
    return updated


@router.get("/me/registrations", response_model=List[schemas.Registration])
def list_my_registrations(
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    return registration_repo.list_registrations_by_user(db, user.id)
