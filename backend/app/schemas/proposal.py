from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from skills.calendar_exporter import CalendarEvent
from skills.timeline_phase_parser import ProjectPhase

SalesStage = Literal["Prospecting", "Qualification", "Proposal", "Negotiation", "Closed Won", "Closed Lost"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Proposal(_CamelModel):
    """Propuesta generada: campos fijos más secciones personalizadas del playbook."""
    project_name: str = Field(..., min_length=1)
    executive_summary: str = ""
    technical_approach: str = ""
    project_timeline: str = Field(default="", description="Cronograma en texto libre")
    value_proposition: str = ""
    questions_for_client: list[str] = Field(default_factory=list)
    contact_person: str | None = None
    contact_department: str | None = None
    contact_email: str | None = None
    calendar_events: list[CalendarEvent] = Field(default_factory=list)
    additional_sections: dict[str, str] = Field(
        default_factory=dict,
        description="Secciones dinámicas definidas por el playbook de industria",
    )


class ProjectFolder(_CamelModel):
    """Registro de proyecto dueño de la propuesta y de su cronograma derivado."""
    id: str
    folder_name: str = Field(..., min_length=1)
    generated_date: str = Field(..., description="Instante ISO-8601 de generación")
    proposal: Proposal
    start_date: str | None = None
    end_date: str | None = None
    phases: list[ProjectPhase] = Field(default_factory=list)
    sales_stage: SalesStage = "Prospecting"
    probability: int = Field(default=10, ge=0, le=100)
