"""
Event statistics for the organizer dashboard.

Hour buckets follow the dashboard charts: ``H:00`` keys in the configured
``STATS_TIMEZONE``, sorted by hour, empty hours omitted.
"""
from __future__ import annotations

import uuid
from collections import Counter
from datetime import datetime
from typing import Iterable, List, Sequence

from sqlalchemy.orm import Session

from eventdesk.db import models, schemas
from eventdesk.db.models import now_utc
from eventdesk.db.repositories import events as event_repo
from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.services.errors import EventNotFoundError
from eventdesk.utils.timeutils import hour_key


def check_in_rate(registered: int, checked_in: int) -> float:
    if registered <= 0:
        return 0.0
    return round(checked_in / registered, 4)


def group_by_hour(timestamps: Iterable[datetime]) -> List[schemas.HourCount]:
    counts: Counter = Counter(hour_key(ts) for ts in timestamps if ts is not None)
    ordered = sorted(counts.items(), key=lambda item: int(item[0].split(":")[0]))
    return [schemas.HourCount(hour=key, count=count) for key, count in ordered if count > 0]


def get_event_stats(db: Session, event_id: uuid.UUID) -> schemas.EventStats:
    event = event_repo.get_event(db, event_id)
    if not event:
        raise EventNotFoundError()
    registrations = registration_repo.list_registrations_by_event(db, event.id)
    checked = [r for r in registrations if r.checked_in]
    return schemas.EventStats(
        event_id=event.id,
        total_registered=len(registrations),
        total_checked_in=len(checked),
        check_in_rate=check_in_rate(len(registrations), len(checked)),
        registrations_by_hour=group_by_hour(r.registered_at for r in registrations),
        checkins_by_hour=group_by_hour(r.checked_in_at for r in checked),
    )


def get_dashboard_summary(db: Session, events: Sequence[models.Event]) -> schemas.DashboardSummary:
    counts = registration_repo.count_registrations_by_event(db, [e.id for e in events])
    summaries = []
    for event in events:
        registered, checked_in = counts.get(event.id, (0, 0))
        summaries.append(schemas.EventSummary(
            event_id=event.id,
            name=event.name,
            date=event.date or "",
            location=event.location or "",
            is_active=event.is_active,
            total_registered=registered,
            total_checked_in=checked_in,
            check_in_rate=check_in_rate(registered, checked_in),
        ))
    return schemas.DashboardSummary(
        generated_at=now_utc(),
        total_events=len(summaries),
        total_registered=sum(s.total_registered for s in summaries),
        total_checked_in=sum(s.total_checked_in for s in summaries),
        events=summaries,
    )
