from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.config import settings
from app.schemas.proposal import ProjectFolder, Proposal
from skills.calendar_exporter import CalendarEvent


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DurationRequest(_CamelModel):
    timeline_text: str = Field(default="", max_length=settings.max_timeline_chars)


class ScheduleRequest(_CamelModel):
    generated_date: str = Field(..., min_length=1)
    timeline_text: str = Field(default="", max_length=settings.max_timeline_chars)


class CalendarExportRequest(_CamelModel):
    """Exporta eventos explícitos o, si se envía un cronograma, sus fases."""
    project_name: str = Field(..., min_length=1, max_length=300)
    events: list[CalendarEvent] = Field(default_factory=list)
    generated_date: str | None = None
    timeline_text: str | None = Field(default=None, max_length=settings.max_timeline_chars)


class GeneratedProposalRequest(_CamelModel):
    folder_name: str = Field(..., min_length=1, max_length=300)
    proposal: Proposal
    generated_date: datetime | None = None


class ManualEditRequest(_CamelModel):
    folder: ProjectFolder
    proposal: Proposal


class CopilotRequest(_CamelModel):
    folder: ProjectFolder
    instruction: str = Field(..., min_length=1, max_length=2000)
