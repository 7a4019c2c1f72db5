"""Attendance CSV export."""
from __future__ import annotations

import csv
import io
import re
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from eventdesk.db import models
from eventdesk.db.models import now_utc
from eventdesk.db.repositories import events as event_repo
from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.db.repositories import users as user_repo
from eventdesk.services.errors import EventNotFoundError
from eventdesk.utils.timeutils import ensure_aware, format_display

CSV_HEADER = ["Name", "Email", "Phone", "Registered At", "Checked In", "Checked In At"]
UNKNOWN = "Unknown"
NOT_AVAILABLE = "N/A"

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/"\r\n]')


def export_attendance_csv(db: Session, event_id: uuid.UUID, *, generated_at: Optional[datetime] = None) -> str:
    event = event_repo.get_event(db, event_id)
    if not event:
        raise EventNotFoundError()

    registrations = registration_repo.list_registrations_by_event(db, event.id)
    attendees = {u.id: u for u in user_repo.list_users_by_ids(db, {r.user_id for r in registrations})}

    output = io.StringIO()
    output.write(f"Event: {event.name or 'Unknown Event'}\n")
    output.write(f"Generated: {format_display(generated_at or now_utc())}\n")
    output.write("\n")
    csv.writer(output, lineterminator="\n").writerow(CSV_HEADER)

    rows = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for registration in registrations:
        attendee = attendees.get(registration.user_id)
        rows.writerow([
            (attendee.name if attendee else None) or UNKNOWN,
            (attendee.email if attendee else None) or UNKNOWN,
            (attendee.phone if attendee else None) or UNKNOWN,
            format_display(registration.registered_at) or UNKNOWN,
            "Yes" if registration.checked_in else "No",
            format_display(registration.checked_in_at) or NOT_AVAILABLE,
        ])
    return output.getvalue()


def attendance_filename(event: models.Event, *, on: Optional[datetime] = None) -> str:
    day = ensure_aware(on or now_utc()).astimezone(timezone.utc).date().isoformat()
    name = _UNSAFE_FILENAME_CHARS.sub("_", event.name or "event")
    return f"{name}_attendance_{day}.csv"
