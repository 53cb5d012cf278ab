"""
Custom exceptions for the Proposal Timeline Service.

This module provides a hierarchy of exceptions for consistent error handling
across the application. All exceptions inherit from ProposalServiceError.
Timeline text never raises: parsing problems degrade to defaults inside the
timeline_phase_parser skill. These exceptions cover the layers around it.

Example:
    try:
        folder = await copilot.refine(folder, instruction)
    except LLMInvocationError as e:
        logger.error(f"Co-pilot failed: {e}")
"""

from typing import Optional


class ProposalServiceError(Exception):
    """
    Base exception class for all Proposal Timeline Service errors.

    Attributes:
        message: Human-readable description of the error.
        details: Optional additional context for debugging.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable description of the error.
            details: Optional additional context for debugging.
        """
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation with optional details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class LLMInvocationError(ProposalServiceError):
    """
    Exception raised when the co-pilot LLM invocation fails.

    This includes rate limiting, API errors and empty responses.

    Attributes:
        model_name: Name of the LLM model that failed.
        retry_count: Number of retry attempts made before failure.
    """

    def __init__(
        self,
        message: str,
        model_name: Optional[str] = None,
        retry_count: int = 0,
        details: Optional[str] = None,
    ) -> None:
        self.model_name = model_name
        self.retry_count = retry_count

        enhanced_message = f"[LLM] {message}"
        if model_name:
            enhanced_message = f"{enhanced_message} (model: {model_name})"
        if retry_count > 0:
            enhanced_message = f"{enhanced_message} (retries: {retry_count})"

        super().__init__(enhanced_message, details)


class CopilotNotConfiguredError(ProposalServiceError):
    """Raised when the co-pilot is used without a Groq API key."""

    def __init__(self, details: Optional[str] = None) -> None:
        super().__init__(
            "[Copilot] GROQ_API_KEY is not configured; co-pilot refinement is disabled",
            details,
        )


class ProposalValidationError(ProposalServiceError):
    """
    Exception raised when a proposal record cannot be processed.

    Attributes:
        field: Name of the offending field, if known.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        self.field = field

        enhanced_message = f"[Proposal] {message}"
        if field:
            enhanced_message = f"{enhanced_message} (field: {field})"

        super().__init__(enhanced_message, details)
