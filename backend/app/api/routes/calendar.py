"""Endpoint de exportación de fechas clave a iCalendar."""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response

from app.core.logging import get_logger
from app.schemas import CalendarExportRequest
from app.services import get_container
from skills.calendar_exporter import CalendarExportError, phases_to_calendar_events
from skills.timeline_phase_parser import InvalidStartDateError

logger = get_logger(__name__)
router = APIRouter(prefix="/calendar")


@router.post("/ics")
async def export_ics(request: CalendarExportRequest) -> Response:
    """
    Genera un .ics con los eventos enviados.

    Si se incluye generatedDate se añaden los inicios de fase calculados;
    sin timelineText se usa la fase única por defecto.
    """
    container = get_container()
    events = list(request.events)

    if request.generated_date:
        try:
            schedule = container.parser.compute(request.generated_date, request.timeline_text or "")
        except InvalidStartDateError as e:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
        events.extend(phases_to_calendar_events(schedule.phases))

    if not events:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No hay eventos para exportar")

    try:
        export = container.calendar_exporter.export(events, request.project_name)
    except CalendarExportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return Response(
        content=export.content,
        media_type="text/calendar; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{export.filename}"',
            "X-Skipped-Events": str(len(export.skipped_events)),
        },
    )
