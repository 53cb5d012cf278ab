from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.proposal import ProjectFolder
from skills.timeline_phase_parser import ProjectSchedule


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DurationResponse(_CamelModel):
    total_weeks: int


class ScheduleResponse(ProjectSchedule):
    used_fallback: bool = False


class MarkdownTimelineResponse(_CamelModel):
    markdown: str


class CopilotResponse(_CamelModel):
    folder: ProjectFolder
    reply: str
    timeline_changed: bool
