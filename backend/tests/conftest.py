"""
Pytest configuration and shared fixtures.

This module provides common fixtures for testing the Proposal Timeline
Service. The co-pilot LLM is always mocked; no test talks to Groq.

Usage:
    def test_example(mock_llm, sample_folder):
        # mock_llm is already configured as AsyncMock
        # sample_folder already carries a computed schedule
        pass
"""

from datetime import datetime, timezone

import pytest
from unittest.mock import AsyncMock, MagicMock


# =============================================================================
# TIMELINE FIXTURES
# =============================================================================


PROJECT_START = "2025-01-01T00:00:00.000Z"

THREE_PHASE_TIMELINE = (
    "Phase 1: Discovery & Planning (2-3 weeks)\n"
    "Phase 2: Development, (6-8 weeks)\n"
    "Phase 3: Launch (1 week)"
)


@pytest.fixture
def project_start() -> str:
    """Canonical project start instant used across tests."""
    return PROJECT_START


@pytest.fixture
def three_phase_timeline() -> str:
    """LLM-style timeline with ranges, a trailing comma and a singular 'week'."""
    return THREE_PHASE_TIMELINE


@pytest.fixture
def parser():
    from skills.timeline_phase_parser import TimelinePhaseParser

    return TimelinePhaseParser()


# =============================================================================
# LLM MOCK FIXTURES
# =============================================================================


@pytest.fixture
def mock_llm_response():
    """
    Factory fixture for creating mock LLM responses.
    
    Usage:
        def test_example(mock_llm_response):
            response = mock_llm_response("Test content")
            assert response.content == "Test content"
    """
    def _create_response(content: str = "Mocked LLM response"):
        response = MagicMock()
        response.content = content
        return response
    return _create_response


@pytest.fixture
def mock_llm(mock_llm_response):
    """
    AsyncMock that simulates the co-pilot chat model.
    
    Override ``mock_llm.ainvoke.return_value.content`` in individual tests.
    """
    llm = AsyncMock()
    llm.ainvoke.return_value = mock_llm_response("Mocked LLM response")
    return llm


# =============================================================================
# PROPOSAL FIXTURES
# =============================================================================


@pytest.fixture
def sample_proposal():
    """
    Factory fixture for Proposal records.

    Usage:
        def test_example(sample_proposal):
            proposal = sample_proposal(project_timeline="Phase 1: A (2 weeks)")
    """
    from app.schemas import Proposal

    def _create_proposal(**overrides):
        data = {
            "project_name": "City Permit Portal",
            "executive_summary": "Modernise the permit workflow.",
            "project_timeline": THREE_PHASE_TIMELINE,
            "additional_sections": {"securityPlan": "SOC 2 aligned controls."},
        }
        data.update(overrides)
        return Proposal(**data)
    return _create_proposal


@pytest.fixture
def timeline_service(mock_logger):
    from app.services.proposal_timeline import ProposalTimelineService

    return ProposalTimelineService(logger=mock_logger)


@pytest.fixture
def sample_folder(timeline_service, sample_proposal):
    """ProjectFolder generated on 2025-01-01 with its schedule computed."""
    return timeline_service.apply_generated_proposal(
        "City Permit Portal",
        sample_proposal(),
        generated_date=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


# =============================================================================
# CONTAINER / API FIXTURES
# =============================================================================


@pytest.fixture
def test_container(mock_llm):
    """
    Fresh global container with the LLM replaced by a mock.

    Routes call get_container(), so the override is visible to the API.
    """
    from app.services.container import get_container, reset_container

    reset_container()
    container = get_container()
    container.override_llm(mock_llm)
    yield container
    reset_container()


@pytest.fixture
def client(test_container):
    """FastAPI TestClient bound to the mocked container."""
    from fastapi.testclient import TestClient

    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# LOGGER FIXTURES
# =============================================================================


@pytest.fixture
def mock_logger():
    """
    Mock ProposalLogger for asserting recompute tracing.
    
    Usage:
        def test_example(mock_logger):
            service = ProposalTimelineService(logger=mock_logger)
            mock_logger.schedule_recomputed.assert_called_once()
    """
    logger = MagicMock()
    logger.schedule_recomputed = MagicMock()
    logger.schedule_kept = MagicMock()
    logger.copilot_request = MagicMock()
    logger.error = MagicMock()
    return logger


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
