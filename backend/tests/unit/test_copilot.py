"""
Unit tests for ProposalCopilot.

The chat model is an AsyncMock; tests check the messages sent and how
the returned timeline flows into the folder schedule.
"""

import json

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from app.core.exceptions import LLMInvocationError
from app.services.copilot import COPILOT_TIMELINE_PROMPT, LLMProtocol, ProposalCopilot
from app.services.proposal_timeline import ProposalTimelineService
from app.services.utils import parse_json_response


def _payload(timeline: str, reply: str = "Added a security review.") -> str:
    return json.dumps({"projectTimeline": timeline, "reply": reply})


@pytest.fixture
def copilot(mock_llm, timeline_service, mock_logger):
    return ProposalCopilot(llm=mock_llm, timeline_service=timeline_service, logger=mock_logger)


class TestCopilotRefine:
    """Tests for ProposalCopilot.refine()."""

    @pytest.mark.asyncio
    async def test_new_timeline_recomputes_schedule(self, copilot, mock_llm, sample_folder):
        mock_llm.ainvoke.return_value.content = _payload(
            "Phase 1: Discovery (2 weeks)\nPhase 2: Security Review (2 weeks)"
        )

        result = await copilot.refine(sample_folder, "Add a two week security review")

        assert result.timeline_changed is True
        assert result.reply == "Added a security review."
        assert [p.name for p in result.folder.phases] == ["Discovery", "Security Review"]
        assert result.folder.end_date == "2025-01-29T00:00:00.000Z"
        assert result.folder.proposal.project_timeline.startswith("Phase 1: Discovery")

    @pytest.mark.asyncio
    async def test_sends_prompt_timeline_and_instruction(self, copilot, mock_llm, sample_folder):
        mock_llm.ainvoke.return_value.content = _payload("Phase 1: A (2 weeks)")

        await copilot.refine(sample_folder, "Shorten everything")

        messages = mock_llm.ainvoke.call_args[0][0]
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == COPILOT_TIMELINE_PROMPT
        assert isinstance(messages[1], HumanMessage)
        assert "Shorten everything" in messages[1].content
        assert "Phase 2: Development, (6-8 weeks)" in messages[1].content

    @pytest.mark.asyncio
    async def test_fenced_json_is_accepted(self, copilot, mock_llm, sample_folder):
        mock_llm.ainvoke.return_value.content = "```json\n" + _payload("Phase 1: A (3 weeks)") + "\n```"

        result = await copilot.refine(sample_folder, "One phase only")

        assert result.folder.phases[0].duration_weeks == 3

    @pytest.mark.asyncio
    async def test_same_timeline_reports_unchanged(self, copilot, mock_llm, sample_folder):
        mock_llm.ainvoke.return_value.content = _payload(sample_folder.proposal.project_timeline)

        result = await copilot.refine(sample_folder, "Looks fine?")

        assert result.timeline_changed is False
        assert result.folder.phases == sample_folder.phases

    @pytest.mark.asyncio
    async def test_missing_reply_gets_default(self, copilot, mock_llm, sample_folder):
        mock_llm.ainvoke.return_value.content = json.dumps({"projectTimeline": "Phase 1: A (1 week)"})

        result = await copilot.refine(sample_folder, "Compress")

        assert result.reply == "Timeline updated."


class TestCopilotErrors:
    """Tests for co-pilot error handling."""

    @pytest.mark.asyncio
    async def test_llm_failure_is_wrapped(self, copilot, mock_llm, mock_logger, sample_folder):
        mock_llm.ainvoke.side_effect = RuntimeError("rate limited")

        with pytest.raises(LLMInvocationError) as exc_info:
            await copilot.refine(sample_folder, "Anything")

        assert "rate limited" in str(exc_info.value)
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_non_json_answer_raises(self, copilot, mock_llm, sample_folder):
        mock_llm.ainvoke.return_value.content = "Sure! I made the timeline shorter."

        with pytest.raises(LLMInvocationError):
            await copilot.refine(sample_folder, "Shorter")

    @pytest.mark.asyncio
    async def test_blank_timeline_raises(self, copilot, mock_llm, sample_folder):
        mock_llm.ainvoke.return_value.content = _payload("   ")

        with pytest.raises(LLMInvocationError):
            await copilot.refine(sample_folder, "Clear it")

    @pytest.mark.asyncio
    async def test_oversized_timeline_is_an_llm_error(self, mock_llm, mock_logger, sample_folder):
        service = ProposalTimelineService(logger=mock_logger, max_timeline_chars=200)
        copilot = ProposalCopilot(llm=mock_llm, timeline_service=service, logger=mock_logger)
        mock_llm.ainvoke.return_value.content = _payload("Phase 1: Build (2 weeks)\n" * 20)

        with pytest.raises(LLMInvocationError) as exc_info:
            await copilot.refine(sample_folder, "Expand everything")

        assert "projectTimeline" in str(exc_info.value)


def test_mock_llm_satisfies_protocol(mock_llm):
    assert isinstance(mock_llm, LLMProtocol)


class TestParseJsonResponse:
    """Tests for the LLM JSON helper."""

    def test_plain_json(self):
        assert parse_json_response('{"a": 1}') == {"a": 1}

    def test_json_after_preamble(self):
        assert parse_json_response('Here you go: {"a": 1}') == {"a": 1}

    def test_non_object_returns_none(self):
        assert parse_json_response("[1, 2]") is None

    def test_garbage_returns_none(self):
        assert parse_json_response("no json here") is None
