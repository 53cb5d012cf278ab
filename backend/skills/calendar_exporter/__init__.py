"""
Calendar Exporter Skill

Exports proposal key dates and computed phase dates as iCalendar files.
"""

from .definition import (
    CalendarEvent,
    CalendarExportError,
    EmptyProjectNameError,
    IcsExport,
)

from .impl import (
    IcsCalendarExporter,
    generate_ics_content,
    ics_filename,
    phases_to_calendar_events,
    DEFAULT_PRODUCT_ID,
    DEFAULT_UID_DOMAIN,
)

__all__ = [
    # Classes
    "IcsCalendarExporter",
    # Models
    "CalendarEvent",
    "IcsExport",
    # Exceptions
    "CalendarExportError",
    "EmptyProjectNameError",
    # Functions
    "generate_ics_content",
    "ics_filename",
    "phases_to_calendar_events",
    # Constants
    "DEFAULT_PRODUCT_ID",
    "DEFAULT_UID_DOMAIN",
]
