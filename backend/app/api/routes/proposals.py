"""Endpoints que recalculan el cronograma de una propuesta."""

from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import CopilotNotConfiguredError, LLMInvocationError, ProposalValidationError
from app.core.logging import get_logger
from app.schemas import (
    CopilotRequest,
    CopilotResponse,
    GeneratedProposalRequest,
    ManualEditRequest,
    ProjectFolder,
)
from app.services import get_container
from skills.timeline_phase_parser import InvalidStartDateError

logger = get_logger(__name__)
router = APIRouter(prefix="/proposals")


def _client_error(e: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.post("/generated", response_model=ProjectFolder)
async def proposal_generated(request: GeneratedProposalRequest) -> ProjectFolder:
    """Crea la carpeta de una propuesta recién generada con su cronograma."""
    service = get_container().timeline_service
    try:
        return service.apply_generated_proposal(
            request.folder_name, request.proposal, request.generated_date
        )
    except ProposalValidationError as e:
        raise _client_error(e)


@router.post("/manual-edit", response_model=ProjectFolder)
async def proposal_manual_edit(request: ManualEditRequest) -> ProjectFolder:
    """Guarda ediciones manuales; recalcula si cambió el cronograma."""
    service = get_container().timeline_service
    try:
        return service.apply_manual_edit(request.folder, request.proposal)
    except (InvalidStartDateError, ProposalValidationError) as e:
        raise _client_error(e)


@router.post("/copilot", response_model=CopilotResponse)
async def proposal_copilot(request: CopilotRequest) -> CopilotResponse:
    """Refina el cronograma con el co-pilot y recalcula fases y fechas."""
    try:
        copilot = get_container().copilot
        result = await copilot.refine(request.folder, request.instruction)
    except CopilotNotConfiguredError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except LLMInvocationError as e:
        logger.error(f"[COPILOT] {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except InvalidStartDateError as e:
        raise _client_error(e)

    return CopilotResponse(
        folder=result.folder,
        reply=result.reply,
        timeline_changed=result.timeline_changed,
    )
