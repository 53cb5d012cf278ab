"""
Proposal co-pilot.

Sends the user's refinement instruction and the current timeline to the
chat model, takes the rewritten timeline it returns and re-derives the
folder's schedule from it.

Example:
    copilot = ProposalCopilot(llm=get_llm(settings.copilot_temperature))
    result = await copilot.refine(folder, "Add a two week security review")
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, runtime_checkable

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from app.core.config import settings
from app.core.exceptions import LLMInvocationError, ProposalValidationError
from app.core.logging import ProposalLogger
from app.schemas.proposal import ProjectFolder
from app.services.proposal_timeline import ProposalTimelineService
from app.services.utils import parse_json_response

COPILOT_TIMELINE_PROMPT = """You revise the project timeline of a business proposal.
Keep the format "Phase <n>: <name> (<low>-<high> weeks)" for every phase, one phase per line.
Reply only with a JSON object: {"projectTimeline": "<full updated timeline>", "reply": "<short note for the user>"}"""


@runtime_checkable
class LLMProtocol(Protocol):
    """Any chat model exposing ``ainvoke`` (ChatGroq or a test double)."""

    async def ainvoke(self, messages: List[BaseMessage]) -> Any:
        ...


@dataclass
class CopilotResult:
    folder: ProjectFolder
    reply: str
    timeline_changed: bool


class ProposalCopilot:
    """
    Co-pilot that rewrites a proposal's timeline on request.

    The LLM is injected so tests can pass an AsyncMock.
    """

    def __init__(
        self,
        llm: LLMProtocol,
        timeline_service: Optional[ProposalTimelineService] = None,
        logger: Optional[ProposalLogger] = None,
    ) -> None:
        self._llm = llm
        self._timeline_service = timeline_service or ProposalTimelineService()
        self._logger = logger or ProposalLogger("copilot")

    def _build_messages(self, folder: ProjectFolder, instruction: str) -> List[BaseMessage]:
        proposal = folder.proposal
        return [
            SystemMessage(content=COPILOT_TIMELINE_PROMPT),
            HumanMessage(
                content=(
                    f"Project: {proposal.project_name}\n\n"
                    f"Current timeline:\n{proposal.project_timeline or '(empty)'}\n\n"
                    f"Instruction: {instruction}"
                )
            ),
        ]

    async def refine(self, folder: ProjectFolder, instruction: str) -> CopilotResult:
        """
        Apply one co-pilot instruction to the folder's timeline.

        Returns:
            CopilotResult with the updated folder (schedule recomputed).

        Raises:
            LLMInvocationError: If the model call fails or its answer
                carries no usable timeline.
        """
        self._logger.copilot_request(folder.id, instruction)

        try:
            response = await self._llm.ainvoke(self._build_messages(folder, instruction))
        except Exception as e:
            self._logger.error("copilot", e)
            raise LLMInvocationError(
                "Co-pilot request failed",
                model_name=settings.groq_model,
                details=f"{type(e).__name__}: {str(e)[:200]}",
            ) from e

        data = parse_json_response(getattr(response, "content", "") or "")
        timeline = data.get("projectTimeline") if data else None
        if not isinstance(timeline, str) or not timeline.strip():
            raise LLMInvocationError(
                "Co-pilot response did not include a project timeline",
                model_name=settings.groq_model,
            )

        timeline = timeline.strip()
        changed = timeline != folder.proposal.project_timeline
        updated = folder.proposal.model_copy(update={"project_timeline": timeline})
        try:
            new_folder = self._timeline_service.apply_copilot_update(folder, updated)
        except ProposalValidationError as e:
            raise LLMInvocationError(
                "Co-pilot returned an unusable project timeline",
                model_name=settings.groq_model,
                details=str(e),
            ) from e

        return CopilotResult(
            folder=new_folder,
            reply=str(data.get("reply") or "Timeline updated."),
            timeline_changed=changed,
        )
