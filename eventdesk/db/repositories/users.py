"""
User repository functions.

Users are keyed by email (stored lower-case); lookups are case-insensitive.
"""
from __future__ import annotations

import uuid
from typing import Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from eventdesk.db import schemas, models


def normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    return email.strip().lower()


def create_user(db: Session, user: schemas.UserCreate) -> models.User:
    db_user = models.User(
        name=user.name.strip(),
        email=normalize_email(user.email),
        phone=(user.phone or "").strip() or None,
        role=user.role,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def get_user(db: Session, user_id: uuid.UUID) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    normalized = normalize_email(email)
    if not normalized:
        return None
    return db.query(models.User).filter(func.lower(models.User.email) == normalized).first()


def list_users_by_ids(db: Session, user_ids: Iterable[uuid.UUID]) -> List[models.User]:
    ids = list({uid for uid in user_ids if uid is not None})
    if not ids:
        return []
    return db.query(models.User).filter(models.User.id.in_(ids)).all()


def update_user(db: Session, user_id: uuid.UUID, user: schemas.UserUpdate) -> Optional[models.User]:
    db_user = get_user(db, user_id)
    if db_user:
        update_data = user.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_user, key, value)
        db.commit()
        db.refresh(db_user)
    return db_user
