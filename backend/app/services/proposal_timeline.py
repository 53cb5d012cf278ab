"""
Proposal timeline consumers.

Every place that changes a proposal's ``project_timeline`` goes through
this module so that ``start_date``, ``end_date`` and ``phases`` on the
owning ProjectFolder are always derived from the current text. Each
recompute replaces the previous values wholesale; nothing is merged.

Example:
    service = ProposalTimelineService()
    folder = service.apply_generated_proposal("City Portal", proposal)
    folder = service.apply_manual_edit(folder, edited_proposal)
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from app.core.config import settings
from app.core.exceptions import ProposalValidationError
from app.core.logging import ProposalLogger
from app.schemas.proposal import ProjectFolder, Proposal
from skills.timeline_phase_parser import TimelinePhaseParser, format_instant


class ProposalTimelineService:
    """
    Recomputes derived schedules for proposal records.

    Attributes:
        _parser: Timeline parser shared by all operations.
        _logger: Logger for recompute tracing.
    """

    def __init__(
        self,
        parser: Optional[TimelinePhaseParser] = None,
        logger: Optional[ProposalLogger] = None,
        max_timeline_chars: Optional[int] = None,
    ) -> None:
        self._parser = parser or TimelinePhaseParser()
        self._logger = logger or ProposalLogger("timeline")
        self._max_timeline_chars = max_timeline_chars or settings.max_timeline_chars

    def _check_timeline(self, proposal: Proposal) -> None:
        if len(proposal.project_timeline) > self._max_timeline_chars:
            raise ProposalValidationError(
                f"Timeline exceeds {self._max_timeline_chars} characters",
                field="projectTimeline",
            )

    def _with_schedule(self, folder: ProjectFolder, proposal: Proposal, trigger: str) -> ProjectFolder:
        """Return a copy of the folder with the proposal and a fresh schedule."""
        self._check_timeline(proposal)
        schedule = self._parser.compute(folder.generated_date, proposal.project_timeline)
        self._logger.schedule_recomputed(folder.id, trigger, len(schedule.phases), schedule.end_date)
        return folder.model_copy(update={
            "proposal": proposal,
            "start_date": schedule.start_date,
            "end_date": schedule.end_date,
            "phases": list(schedule.phases),
        })

    def apply_generated_proposal(
        self,
        folder_name: str,
        proposal: Proposal,
        generated_date: Optional[datetime] = None,
    ) -> ProjectFolder:
        """
        Create the folder for a freshly generated proposal.

        Args:
            folder_name: Display name for the new folder.
            proposal: Proposal returned by the generation pipeline.
            generated_date: Generation instant; defaults to now (UTC).

        Returns:
            New ProjectFolder with its schedule computed.
        """
        generated_at = generated_date or datetime.now(timezone.utc)
        folder = ProjectFolder(
            id=str(uuid.uuid4()),
            folder_name=folder_name,
            generated_date=format_instant(
                generated_at if generated_at.tzinfo else generated_at.replace(tzinfo=timezone.utc)
            ),
            proposal=proposal,
        )
        return self._with_schedule(folder, proposal, "generated")

    def apply_manual_edit(self, folder: ProjectFolder, edited: Proposal) -> ProjectFolder:
        """
        Save manual edits, recomputing only when the timeline text changed.

        Folders that never had a schedule get one on first save.
        """
        timeline_changed = edited.project_timeline != folder.proposal.project_timeline
        if timeline_changed or not folder.phases:
            return self._with_schedule(folder, edited, "manual_edit")

        self._logger.schedule_kept(folder.id, "timeline unchanged")
        return folder.model_copy(update={"proposal": edited})

    def apply_copilot_update(self, folder: ProjectFolder, updated: Proposal) -> ProjectFolder:
        """Apply a co-pilot rewrite; the schedule is always recomputed."""
        return self._with_schedule(folder, updated, "copilot")
