"""
Calendar Exporter - Implementation

Builds iCalendar (RFC 5545) documents with one all-day event per key
project date, ready to be downloaded as a .ics attachment.
"""

import logging
import re
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Iterable, List, Optional, Tuple

try:
    from .definition import (
        CalendarEvent,
        EmptyProjectNameError,
        IcsExport,
    )
except ImportError:
    from definition import (
        CalendarEvent,
        EmptyProjectNameError,
        IcsExport,
    )

logger = logging.getLogger(__name__)


DEFAULT_PRODUCT_ID = "-//Proposal Timeline Service//RFP Response Generator//EN"
DEFAULT_UID_DOMAIN = "proposals.local"

CRLF = "\r\n"

# RFC 5545 section 3.1, excluding the line break
MAX_LINE_OCTETS = 75


def _event_days(raw: str) -> Optional[Tuple[date, date]]:
    """
    (DTSTART, DTEND) days of an ISO date or instant, in UTC.

    None if the value is unparsable or its day has no following day.
    """
    if not raw or not raw.strip():
        return None
    try:
        parsed = datetime.fromisoformat(raw.strip())
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        day = parsed.date()
        return day, day + timedelta(days=1)
    except (ValueError, OverflowError):
        return None


def _fold_line(line: str) -> str:
    """Split a content line into 75-octet chunks joined by CRLF + space."""
    if len(line.encode("utf-8")) <= MAX_LINE_OCTETS:
        return line

    chunks: List[str] = []
    current = ""
    size = 0
    for char in line:
        width = len(char.encode("utf-8"))
        if size + width > MAX_LINE_OCTETS:
            chunks.append(current)
            # continuation lines start with a single space
            current, size = "", 1
        current += char
        size += width
    chunks.append(current)
    return (CRLF + " ").join(chunks)


def _escape_text(value: str) -> str:
    """Escape TEXT values per RFC 5545 section 3.3.11."""
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def ics_filename(project_name: str) -> str:
    """'Acme Portal' -> 'Acme_Portal_deadlines.ics'."""
    return re.sub(r"\s", "_", project_name) + "_deadlines.ics"


def phases_to_calendar_events(phases: Iterable[Any]) -> List[CalendarEvent]:
    """
    Derive key dates from computed project phases.

    One "<name> begins" event per phase plus a closing "<name> ends"
    event for the last phase. Accepts any objects exposing ``name``,
    ``start_date`` and ``end_date``.
    """
    events: List[CalendarEvent] = []
    last = None
    for phase in phases:
        events.append(CalendarEvent(title=f"{phase.name} begins", date=phase.start_date))
        last = phase

    if last is not None:
        events.append(CalendarEvent(title=f"{last.name} ends", date=last.end_date))

    return events


class IcsCalendarExporter:
    """
    Renders CalendarEvent lists as iCalendar documents.

    Events whose date cannot be parsed are skipped with a warning
    instead of aborting the whole export. Content lines longer than
    75 octets are folded.

    Usage:
        exporter = IcsCalendarExporter()
        export = exporter.export(events, project_name="City Portal")
        response = Response(export.content, media_type="text/calendar")
    """

    def __init__(
        self,
        product_id: str = DEFAULT_PRODUCT_ID,
        uid_domain: str = DEFAULT_UID_DOMAIN,
        uid_factory: Optional[Callable[[], str]] = None,
    ):
        self.product_id = product_id
        self.uid_domain = uid_domain
        self._uid_factory = uid_factory or (lambda: str(uuid.uuid4()))

    def export(
        self,
        events: Iterable[CalendarEvent],
        project_name: str,
        now: Optional[datetime] = None,
    ) -> IcsExport:
        """
        Build the .ics document for a project.

        Args:
            events: Key dates to export.
            project_name: Used for the calendar name and descriptions.
            now: DTSTAMP instant; defaults to the current UTC time.

        Raises:
            EmptyProjectNameError: If project_name is blank.
        """
        if not project_name or not project_name.strip():
            raise EmptyProjectNameError()

        stamp_at = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
        stamp = stamp_at.strftime("%Y%m%dT%H%M%SZ")
        name = _escape_text(project_name)

        lines = [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            f"PRODID:{self.product_id}",
            f"X-WR-CALNAME:Deadlines for {name}",
        ]

        exported = 0
        skipped: List[CalendarEvent] = []
        for event in events:
            days = _event_days(event.date)
            if days is None:
                logger.warning(f"Invalid date found for event '{event.title}': {event.date}")
                skipped.append(event)
                continue

            # All-day events end on the following day
            day, next_day = days
            lines.extend([
                "BEGIN:VEVENT",
                f"UID:{self._uid_factory()}@{self.uid_domain}",
                f"DTSTAMP:{stamp}",
                f"DTSTART;VALUE=DATE:{day.strftime('%Y%m%d')}",
                f"DTEND;VALUE=DATE:{next_day.strftime('%Y%m%d')}",
                f"SUMMARY:{_escape_text(event.title)}",
                f"DESCRIPTION:Key date for project: {name}",
                "END:VEVENT",
            ])
            exported += 1

        lines.append("END:VCALENDAR")
        logger.info(f"Exported {exported} event(s) for '{project_name}', skipped {len(skipped)}")

        return IcsExport(
            content=CRLF.join(_fold_line(line) for line in lines),
            exported_events=exported,
            skipped_events=skipped,
            filename=ics_filename(project_name),
        )


# Convenience function
def generate_ics_content(
    events: Iterable[CalendarEvent],
    project_name: str,
    now: Optional[datetime] = None,
) -> str:
    """Return only the .ics text, with default exporter settings."""
    return IcsCalendarExporter().export(events, project_name, now=now).content
