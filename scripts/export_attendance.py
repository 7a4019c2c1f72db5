"""Write an event's attendance sheet as CSV."""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from contextlib import suppress
from pathlib import Path

from eventdesk.db import database
from eventdesk.db.repositories import events as event_repo
from eventdesk.services import export_service


logger = logging.getLogger("eventdesk.scripts.export_attendance")


# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export attendance for one event as CSV")
    parser.add_argument("event_id", help="UUID of the event to export")
    parser.add_argument(
        "-o",
        "--output",
        help="File or directory to write to; a directory gets the default "
        "'<event>_attendance_<date>.csv' name. Defaults to stdout.",
    )
    return parser.parse_args(argv)


def export(event_id: str, output: str | None) -> int:
    try:
        event_uuid = uuid.UUID(event_id)
    except ValueError:
        print(f"Invalid event id: {event_id}", file=sys.stderr)
        return 2

    session = SessionLocal()
    try:
        event = event_repo.get_event(session, event_uuid)
        if not event:
            print(f"Event {event_id} not found.", file=sys.stderr)
            logger.error("Export aborted: unknown event %s", event_id)
            return 1

        content = export_service.export_attendance_csv(session, event.id)
        if not output:
            sys.stdout.write(content)
            return 0

        target = Path(output)
        if target.is_dir():
            target = target / export_service.attendance_filename(event)
        target.write_text(content, encoding="utf-8")
        print(f"Wrote attendance for '{event.name}' to {target}")
        logger.info("Attendance export written", extra={"event_id": str(event.id), "path": str(target)})
        return 0
    finally:
        with suppress(Exception):
            session.close()


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    return export(event_id=args.event_id, output=args.output)


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
