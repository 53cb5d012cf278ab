"""
Dependency Injection Container.

This module provides a centralized container for the services shared by
the API routes: the timeline parser, the proposal timeline service, the
calendar exporter and the lazily created co-pilot LLM.

The container pattern enables:
- Centralized dependency management
- Easy testing with mock dependencies
- Lazy initialization of the LLM client

Example:
    from app.services.container import get_container
    
    container = get_container()
    folder = container.timeline_service.apply_manual_edit(folder, proposal)
"""

from functools import lru_cache
from typing import Optional

from app.core.config import settings
from app.core.logging import ProposalLogger
from app.services.copilot import ProposalCopilot
from app.services.llm_factory import get_llm
from app.services.proposal_timeline import ProposalTimelineService
from skills.calendar_exporter import IcsCalendarExporter
from skills.timeline_phase_parser import TimelinePhaseParser


class DependencyContainer:
    """
    Centralized container for application dependencies.

    Attributes:
        _parser: Shared TimelinePhaseParser (stateless).
        _timeline_service: Cached ProposalTimelineService.
        _exporter: Cached IcsCalendarExporter.
        _llm: Cached co-pilot LLM, created on first use.
        _copilot: Cached ProposalCopilot.
    """

    def __init__(self) -> None:
        """Initialize the container with lazy service references."""
        self._parser: Optional[TimelinePhaseParser] = None
        self._timeline_service: Optional[ProposalTimelineService] = None
        self._exporter: Optional[IcsCalendarExporter] = None
        self._llm = None
        self._copilot: Optional[ProposalCopilot] = None

    @property
    def parser(self) -> TimelinePhaseParser:
        if self._parser is None:
            self._parser = TimelinePhaseParser()
        return self._parser

    @property
    def timeline_service(self) -> ProposalTimelineService:
        if self._timeline_service is None:
            self._timeline_service = ProposalTimelineService(
                parser=self.parser,
                logger=ProposalLogger("timeline"),
            )
        return self._timeline_service

    @property
    def calendar_exporter(self) -> IcsCalendarExporter:
        if self._exporter is None:
            self._exporter = IcsCalendarExporter(
                product_id=settings.ics_product_id,
                uid_domain=settings.ics_uid_domain,
            )
        return self._exporter

    @property
    def llm(self):
        """
        Get the co-pilot LLM instance.

        Raises:
            CopilotNotConfiguredError: If no Groq API key is configured.
        """
        if self._llm is None:
            self._llm = get_llm(settings.copilot_temperature)
        return self._llm

    @property
    def copilot(self) -> ProposalCopilot:
        if self._copilot is None:
            self._copilot = ProposalCopilot(
                llm=self.llm,
                timeline_service=self.timeline_service,
            )
        return self._copilot

    def reset(self) -> None:
        """
        Reset all cached services.
        
        Useful for testing to ensure fresh instances.
        """
        self._parser = None
        self._timeline_service = None
        self._exporter = None
        self._llm = None
        self._copilot = None

    def override_llm(self, mock_llm) -> None:
        """
        Override the LLM service with a mock.
        
        Args:
            mock_llm: Mock LLM implementation for testing.
        """
        self._llm = mock_llm
        # Reset copilot to pick up new LLM
        self._copilot = None


@lru_cache(maxsize=1)
def get_container() -> DependencyContainer:
    """
    Get the singleton DependencyContainer instance.
    
    Uses lru_cache to ensure only one container exists per process.
    """
    return DependencyContainer()


def reset_container() -> None:
    """
    Reset the global container singleton.
    
    Clears the lru_cache and allows a fresh container to be created.
    Useful for testing isolation.
    """
    get_container.cache_clear()
