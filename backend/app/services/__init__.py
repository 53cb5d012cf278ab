from app.services.llm_factory import check_groq_health, get_llm
from app.services.proposal_timeline import ProposalTimelineService
from app.services.copilot import CopilotResult, ProposalCopilot
from app.services.container import get_container, reset_container

__all__ = [
    "get_llm",
    "check_groq_health",
    "ProposalTimelineService",
    "ProposalCopilot",
    "CopilotResult",
    "get_container",
    "reset_container",
]
