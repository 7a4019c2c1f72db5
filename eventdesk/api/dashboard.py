"""
Dashboard endpoints: per-event statistics, the polled summary and the
attendance CSV download.
"""
import uuid
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from eventdesk.api.deps import http_error, require_capability
from eventdesk.api.events import ensure_event_owner, get_event_or_404, visible_events
from eventdesk.audit import AuditAction, AuditStatus, safe_log
from eventdesk.db import schemas
from eventdesk.db.database import get_db
from eventdesk.services import export_service, stats_service
from eventdesk.services.errors import ServiceError
from eventdesk.utils.feature_flags import csv_export_enabled
from eventdesk.utils.role_permissions import CAN_EXPORT, CAN_VIEW_DASHBOARD

router = APIRouter(tags=["dashboard"])


def content_disposition(filename: str) -> str:
    """Attachment header that survives non-Latin-1 event names (RFC 5987)."""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.get("/dashboard", response_model=schemas.DashboardSummary)
def get_dashboard(
    db: Session = Depends(get_db),
    user_context=Depends(require_capability(CAN_VIEW_DASHBOARD)),
):
    user, _ctx = user_context
    return stats_service.get_dashboard_summary(db, visible_events(db, user))


@router.get("/events/{event_id}/stats", response_model=schemas.EventStats)
def get_event_stats(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context=Depends(require_capability(CAN_VIEW_DASHBOARD)),
):
    user, _ctx = user_context
    event = get_event_or_404(db, event_id, user)
    ensure_event_owner(event, user)
    try:
        return stats_service.get_event_stats(db, event.id)
    except ServiceError as e:
        raise http_error(e)


@router.get("/events/{event_id}/export.csv")
def export_attendance(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context=Depends(require_capability(CAN_EXPORT)),
):
    if not csv_export_enabled():
        raise HTTPException(status_code=404, detail="Not found")
    user, _ctx = user_context
    event = get_event_or_404(db, event_id, user)
    ensure_event_owner(event, user)
    try:
        content = export_service.export_attendance_csv(db, event.id)
    except ServiceError as e:
        raise http_error(e)

    filename = export_service.attendance_filename(event)
    headers = {"Content-Disposition": content_disposition(filename)}
    safe_log(
        db,
        action=AuditAction.ATTENDANCE_EXPORT,
        status=AuditStatus.SUCCESS,
        target_type="event",
        target_id=event.id,
        actor_user_id=user.id,
        event_id=event.id,
        metadata={"filename": filename},
    )
    return Response(
        content=content,
        media_type="text/csv",
        headers=headers,
    )
