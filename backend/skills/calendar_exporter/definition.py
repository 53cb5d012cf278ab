"""
Calendar Exporter - Data Definitions

Pydantic models for key project dates exported as iCalendar (.ics).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CalendarEvent(BaseModel):
    """
    Fecha clave de un proyecto (entrega, inicio de fase, etc.).

    ``date`` se guarda tal como llegó; las fechas inválidas se descartan
    al exportar, no al construir el modelo.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="Título del evento.")

    date: str = Field(..., description="Fecha ISO-8601 del evento.")


class IcsExport(BaseModel):
    """Resultado de una exportación a iCalendar."""

    content: str = Field(..., description="Documento .ics con saltos CRLF.")

    exported_events: int = Field(default=0, ge=0)

    skipped_events: List[CalendarEvent] = Field(
        default_factory=list,
        description="Eventos descartados por fecha inválida.",
    )

    filename: Optional[str] = Field(default=None)


# Custom Exceptions

class CalendarExportError(Exception):
    """Excepción base para errores del exportador de calendario."""
    pass


class EmptyProjectNameError(CalendarExportError):
    """El nombre del proyecto es obligatorio para el calendario."""
    def __init__(self):
        super().__init__("El nombre del proyecto no puede estar vacío.")
