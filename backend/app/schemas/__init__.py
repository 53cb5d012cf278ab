from app.schemas.proposal import ProjectFolder, Proposal, SalesStage
from app.schemas.requests import (
    CalendarExportRequest,
    CopilotRequest,
    DurationRequest,
    GeneratedProposalRequest,
    ManualEditRequest,
    ScheduleRequest,
)
from app.schemas.responses import (
    CopilotResponse,
    DurationResponse,
    MarkdownTimelineResponse,
    ScheduleResponse,
)

__all__ = [
    "CalendarExportRequest",
    "CopilotRequest",
    "CopilotResponse",
    "DurationRequest",
    "DurationResponse",
    "GeneratedProposalRequest",
    "ManualEditRequest",
    "MarkdownTimelineResponse",
    "ProjectFolder",
    "Proposal",
    "SalesStage",
    "ScheduleRequest",
    "ScheduleResponse",
]
