"""
Timeline Phase Parser - Data Definitions

Pydantic models for phases parsed out of free-text project timelines
and for the dated schedule envelope built from them.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class PhaseSpec(_CamelModel):
    """Una fase tal como aparece en el texto, antes de asignarle fechas."""

    name: str = Field(..., description="Título de la fase, ya recortado.")

    duration_weeks: int = Field(
        ...,
        ge=0,
        description="Duración en semanas (extremo alto del rango si existe).",
    )


class ProjectPhase(_CamelModel):
    """
    Fase con fechas calculadas.

    Inmutable una vez calculada: ``end_date`` es siempre ``start_date``
    más ``duration_weeks * 7`` días.
    """

    name: str = Field(..., description="Título de la fase.")

    duration_weeks: int = Field(..., ge=0, description="Duración en semanas.")

    start_date: str = Field(
        ...,
        description="Inicio ISO-8601; fin de la fase anterior o inicio del proyecto.",
    )

    end_date: str = Field(..., description="Fin ISO-8601 de la fase.")

    def to_summary(self) -> str:
        """Genera resumen de una línea."""
        return (
            f"{self.name} ({self.duration_weeks} weeks): "
            f"{self.start_date[:10]} -> {self.end_date[:10]}"
        )


class ProjectSchedule(_CamelModel):
    """
    Envelope of a computed timeline.

    Pure derived data: it is rebuilt from scratch whenever the owning
    timeline text changes and is never patched in place.
    """

    start_date: str = Field(..., description="Fecha de generación del proyecto.")

    end_date: str = Field(
        ...,
        description="Fin de la última fase, o start_date si no hay fases.",
    )

    phases: List[ProjectPhase] = Field(
        default_factory=list,
        description="Fases en orden de aparición en el texto.",
    )

    @property
    def total_weeks(self) -> int:
        return sum(phase.duration_weeks for phase in self.phases)

    def to_markdown_timeline(self) -> str:
        """Genera timeline en formato Markdown."""
        lines = [
            "## Project Timeline",
            "",
            f"**Start**: {self.start_date[:10]}",
            f"**End**: {self.end_date[:10]}",
            f"**Total duration**: {self.total_weeks} weeks",
            "",
            "| Phase | Weeks | Start | End |",
            "|-------|-------|-------|-----|",
        ]

        for phase in self.phases:
            lines.append(
                f"| {phase.name} | {phase.duration_weeks} | "
                f"{phase.start_date[:10]} | {phase.end_date[:10]} |"
            )

        return "\n".join(lines)


# Custom Exceptions

class TimelineParserError(Exception):
    """Excepción base para errores del parser de cronogramas."""
    pass


class InvalidStartDateError(TimelineParserError):
    """La fecha de inicio del proyecto no es un instante ISO-8601 válido."""
    def __init__(self, value: Optional[Any]):
        self.value = value
        super().__init__(
            f"Fecha de inicio inválida: '{value}'. "
            f"Use un instante ISO-8601 (ej. 2025-01-01T00:00:00.000Z)."
        )
