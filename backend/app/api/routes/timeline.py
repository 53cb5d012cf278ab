"""Endpoints del motor de cronogramas: duración total, fases y fechas."""

from fastapi import APIRouter, HTTPException, status

from app.core.logging import get_logger
from app.schemas import (
    DurationRequest,
    DurationResponse,
    MarkdownTimelineResponse,
    ScheduleRequest,
    ScheduleResponse,
)
from app.services import get_container
from skills.timeline_phase_parser import InvalidStartDateError

logger = get_logger(__name__)
router = APIRouter(prefix="/timeline")


@router.post("/duration", response_model=DurationResponse)
async def timeline_duration(request: DurationRequest) -> DurationResponse:
    """Suma las anotaciones '(N weeks)' del texto (4 por defecto)."""
    parser = get_container().parser
    return DurationResponse(total_weeks=parser.extract_total_weeks(request.timeline_text))


@router.post("/schedule", response_model=ScheduleResponse)
async def timeline_schedule(request: ScheduleRequest) -> ScheduleResponse:
    """Calcula fases contiguas y fechas a partir del texto del cronograma."""
    parser = get_container().parser
    try:
        schedule, used_fallback = parser.compute_with_fallback(
            request.generated_date, request.timeline_text
        )
    except InvalidStartDateError as e:
        logger.warning(f"[TIMELINE] {e}")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return ScheduleResponse(**schedule.model_dump(), used_fallback=used_fallback)


@router.post("/markdown", response_model=MarkdownTimelineResponse)
async def timeline_markdown(request: ScheduleRequest) -> MarkdownTimelineResponse:
    """Tabla Markdown de fases para páginas de cronograma (PDF/CRM)."""
    parser = get_container().parser
    try:
        schedule = parser.compute(request.generated_date, request.timeline_text)
    except InvalidStartDateError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return MarkdownTimelineResponse(markdown=schedule.to_markdown_timeline())
