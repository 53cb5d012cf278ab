"""
Timeline Phase Parser Skill

Parses free-text proposal timelines into contiguous, dated project phases.
Used by proposal generation, co-pilot refinement, manual edits and the
calendar export.
"""

from .definition import (
    InvalidStartDateError,
    PhaseSpec,
    ProjectPhase,
    ProjectSchedule,
    TimelineParserError,
)

from .impl import (
    TimelinePhaseParser,
    compute_project_schedule,
    extract_total_weeks,
    format_instant,
    parse_instant,
    schedule_phases,
    segment_phases,
    DEFAULT_PHASE_WEEKS,
    DEFAULT_TOTAL_WEEKS,
    FALLBACK_PHASE_NAME,
    LATEST_INSTANT,
    MAX_PHASE_WEEKS,
)

__all__ = [
    # Classes
    "TimelinePhaseParser",
    # Models
    "PhaseSpec",
    "ProjectPhase",
    "ProjectSchedule",
    # Exceptions
    "InvalidStartDateError",
    "TimelineParserError",
    # Functions
    "compute_project_schedule",
    "extract_total_weeks",
    "format_instant",
    "parse_instant",
    "schedule_phases",
    "segment_phases",
    # Constants
    "DEFAULT_PHASE_WEEKS",
    "DEFAULT_TOTAL_WEEKS",
    "FALLBACK_PHASE_NAME",
    "LATEST_INSTANT",
    "MAX_PHASE_WEEKS",
]
