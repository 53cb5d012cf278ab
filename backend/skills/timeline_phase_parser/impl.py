"""
Timeline Phase Parser - Implementation

Turns free-text project timelines (as written by the proposal LLM or an
editor) into contiguous, calendar-dated phases.
Features:
- Whole-text duration extraction from "(N weeks)" annotations
- "Phase N: <name> (<low>-<high> weeks)" segmentation
- Sequential date chaining from the project start instant
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple, Union

try:
    from .definition import (
        InvalidStartDateError,
        PhaseSpec,
        ProjectPhase,
        ProjectSchedule,
    )
except ImportError:
    from definition import (
        InvalidStartDateError,
        PhaseSpec,
        ProjectPhase,
        ProjectSchedule,
    )

logger = logging.getLogger(__name__)


# Returned by the extractor when the text carries no usable annotation
DEFAULT_TOTAL_WEEKS = 4

# Used for a single phase whose own duration cannot be read
DEFAULT_PHASE_WEEKS = 2

FALLBACK_PHASE_NAME = "Project Execution"

# Larger week counts are treated as unreadable (about a century)
MAX_PHASE_WEEKS = 5200

# End dates past this are clamped to it
LATEST_INSTANT = datetime.max.replace(tzinfo=timezone.utc)

# "(4-6 weeks)" or "(8 weeks)"
WEEK_ANNOTATION_PATTERN = re.compile(
    r"\(([0-9]+)-?([0-9]+)?\s+weeks?\)",
    re.IGNORECASE,
)

# "Phase 2: Build, (4-6 weeks)"; the name stops at the annotation's "("
PHASE_PATTERN = re.compile(
    r"Phase\s*[0-9]+:\s*(.*?)\s*\(([0-9]+)-?([0-9]+)?\s+weeks?\)",
    re.IGNORECASE,
)

StartInstant = Union[str, datetime]


def parse_instant(value: StartInstant) -> datetime:
    """
    Parse an ISO-8601 instant into an aware UTC datetime.

    Naive values are taken as UTC. A trailing ``Z`` is accepted.

    Raises:
        InvalidStartDateError: If the value is not a valid instant.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        if not isinstance(value, str) or not value.strip():
            raise InvalidStartDateError(value)
        text = value.strip()
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidStartDateError(value)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        raise InvalidStartDateError(value)


def format_instant(value: datetime) -> str:
    """Render an instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def _to_weeks(raw: Optional[str]) -> Optional[int]:
    """
    Parse a captured week count.

    Returns None when the count is absent, not numeric, zero or above
    MAX_PHASE_WEEKS. "(0 weeks)" is a readable bound, but it is rejected
    so that every dated phase keeps a positive duration; such a phase
    falls back to its low bound or to the per-phase default instead of 0.
    """
    if not raw:
        return None
    try:
        weeks = int(raw)
    except ValueError:
        return None
    return weeks if 0 < weeks <= MAX_PHASE_WEEKS else None


def _advance(cursor: datetime, weeks: int) -> datetime:
    """cursor + weeks, clamped to LATEST_INSTANT when out of range."""
    try:
        return cursor + timedelta(days=weeks * 7)
    except OverflowError:
        logger.warning(
            f"{weeks} weeks from {format_instant(cursor)} is out of range, "
            f"clamping to {format_instant(LATEST_INSTANT)}"
        )
        return LATEST_INSTANT


def _clean_phase_name(raw: str) -> str:
    return raw.strip().rstrip(",").strip()


class TimelinePhaseParser:
    """
    Parses project timeline text into dated phases.

    Every call builds its own match iterator, so a single instance can
    be shared freely between requests.

    Usage:
        parser = TimelinePhaseParser()
        schedule = parser.compute(
            generated_date="2025-01-01T00:00:00.000Z",
            timeline_text="Phase 1: Discovery (2-3 weeks) Phase 2: Build (6 weeks)",
        )

        for phase in schedule.phases:
            print(phase.to_summary())

    Raises:
        InvalidStartDateError: If the start instant cannot be parsed.
    """

    def __init__(
        self,
        default_total_weeks: int = DEFAULT_TOTAL_WEEKS,
        default_phase_weeks: int = DEFAULT_PHASE_WEEKS,
        fallback_phase_name: str = FALLBACK_PHASE_NAME,
    ):
        self.default_total_weeks = default_total_weeks
        self.default_phase_weeks = default_phase_weeks
        self.fallback_phase_name = fallback_phase_name

    def extract_total_weeks(self, text: Optional[str]) -> int:
        """
        Sum every "(N weeks)" / "(L-H weeks)" annotation in the text.

        The high bound of a range is used. Annotations accumulate
        (total, not max). Counts above MAX_PHASE_WEEKS are ignored.
        Returns the default when nothing adds up to a positive total.
        """
        if not text:
            return self.default_total_weeks

        total = 0
        for match in WEEK_ANNOTATION_PATTERN.finditer(text):
            low, high = match.group(1), match.group(2)
            try:
                weeks = int(high) if high else int(low)
            except ValueError:
                continue
            if weeks > MAX_PHASE_WEEKS:
                logger.debug(f"Ignoring oversized annotation '{match.group(0)[:60]}'")
                continue
            total += weeks

        return total if total > 0 else self.default_total_weeks

    def segment(self, text: Optional[str]) -> Tuple[List[PhaseSpec], bool]:
        """
        Split timeline text into ordered phases without dates.

        Returns:
            (phases, used_fallback). When no "Phase N: ... (... weeks)"
            marker is present, a single synthetic phase spanning the
            whole-text duration is returned and used_fallback is True.
        """
        phases: List[PhaseSpec] = []

        for match in PHASE_PATTERN.finditer(text or ""):
            low = _to_weeks(match.group(2))
            high = _to_weeks(match.group(3))
            if high is not None:
                weeks = high
            elif low is not None:
                weeks = low
            else:
                weeks = self.default_phase_weeks
                logger.debug(
                    f"Unreadable duration in '{match.group(0)[:60]}', "
                    f"using {weeks} weeks"
                )

            phases.append(PhaseSpec(
                name=_clean_phase_name(match.group(1)),
                duration_weeks=weeks,
            ))

        if phases:
            return phases, False

        total = self.extract_total_weeks(text)
        logger.debug(
            f"No phase markers found, using '{self.fallback_phase_name}' "
            f"({total} weeks)"
        )
        return [PhaseSpec(name=self.fallback_phase_name, duration_weeks=total)], True

    def schedule(
        self,
        start: StartInstant,
        phases: Sequence[PhaseSpec],
    ) -> ProjectSchedule:
        """
        Chain phase durations from the start instant.

        Each phase starts where the previous one ended. Plain calendar
        days, no business-day handling. End dates that would pass year
        9999 are clamped to LATEST_INSTANT.
        """
        start_at = parse_instant(start)
        cursor = start_at
        dated: List[ProjectPhase] = []

        for phase_spec in phases:
            end_at = _advance(cursor, phase_spec.duration_weeks)
            dated.append(ProjectPhase(
                name=phase_spec.name,
                duration_weeks=phase_spec.duration_weeks,
                start_date=format_instant(cursor),
                end_date=format_instant(end_at),
            ))
            cursor = end_at

        start_iso = format_instant(start_at)
        return ProjectSchedule(
            start_date=start_iso,
            end_date=dated[-1].end_date if dated else start_iso,
            phases=dated,
        )

    def compute_with_fallback(
        self,
        generated_date: StartInstant,
        timeline_text: Optional[str],
    ) -> Tuple[ProjectSchedule, bool]:
        """Segment then schedule, also reporting whether the fallback was used."""
        start_at = parse_instant(generated_date)
        phases, used_fallback = self.segment(timeline_text)
        schedule = self.schedule(start_at, phases)

        logger.info(
            f"Computed {len(schedule.phases)} phase(s) "
            f"{schedule.start_date[:10]} -> {schedule.end_date[:10]}"
            f"{' (fallback)' if used_fallback else ''}"
        )
        return schedule, used_fallback

    def compute(
        self,
        generated_date: StartInstant,
        timeline_text: Optional[str],
    ) -> ProjectSchedule:
        """
        Build the full schedule envelope for a timeline text.

        Args:
            generated_date: Instant the proposal was generated; becomes the
                envelope start date.
            timeline_text: Free-text timeline.

        Returns:
            ProjectSchedule with contiguous phases (at least one).

        Raises:
            InvalidStartDateError: If generated_date is not a valid instant.
        """
        schedule, _ = self.compute_with_fallback(generated_date, timeline_text)
        return schedule


_default_parser = TimelinePhaseParser()


# Convenience functions
def extract_total_weeks(text: Optional[str]) -> int:
    """Whole-text week total, 4 when nothing usable is found."""
    return _default_parser.extract_total_weeks(text)


def segment_phases(text: Optional[str]) -> Tuple[List[PhaseSpec], bool]:
    return _default_parser.segment(text)


def schedule_phases(
    start: StartInstant,
    phases: Sequence[PhaseSpec],
) -> ProjectSchedule:
    return _default_parser.schedule(start, phases)


def compute_project_schedule(
    generated_date: StartInstant,
    timeline_text: Optional[str],
) -> ProjectSchedule:
    """
    Compute start date, end date and phases for a proposal timeline.

    Convenience function for simple use cases.
    """
    return _default_parser.compute(generated_date, timeline_text)
