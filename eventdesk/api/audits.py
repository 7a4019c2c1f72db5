"""
Audit log API endpoints.

Organizers query the audit trail of the events they run.
"""
from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from eventdesk.api.deps import FORBIDDEN_DETAIL, require_organizer
from eventdesk.db import schemas
from eventdesk.db.database import get_db
from eventdesk.db.repositories import audits as audit_repo
from eventdesk.db.repositories import events as event_repo

router = APIRouter(prefix="/audits", tags=["audits"])


@router.get("", response_model=List[schemas.AuditLog])
def list_audit_logs(
    event_id: Optional[uuid.UUID] = None,
    action_type: Optional[str] = None,
    actor_user_id: Optional[uuid.UUID] = None,
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    user_context=Depends(require_organizer),
):
    user, _ctx = user_context
    own_event_ids = [e.id for e in event_repo.list_events_by_organizer(db, user.id)]
    if event_id and event_id not in own_event_ids:
        raise HTTPException(status_code=403, detail=FORBIDDEN_DETAIL)

    audit_logs = audit_repo.get_audit_logs(
        db,
        event_id=event_id,
        event_ids=None if event_id else own_event_ids,
        user_id=actor_user_id,
        action_type=action_type,
        status=status,
        skip=skip,
        limit=limit,
    )
    # The ORM column is metadata_json; ``metadata`` is reserved on declarative models.
    return [
        schemas.AuditLog(
            id=log.id,
            event_id=log.event_id,
            actor_user_id=log.actor_user_id,
            action_type=log.action_type,
            status=log.status,
            target_type=log.target_type,
            target_id=log.target_id,
            reason=log.reason,
            metadata=log.get_metadata(),
            created_at=log.created_at,
        )
        for log in audit_logs
    ]
