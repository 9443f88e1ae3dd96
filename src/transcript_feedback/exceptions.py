"""Feedback exception hierarchy.

All package-specific exceptions inherit from FeedbackError.
Tool validation failures are never raised; they travel back to the model
as ``ToolResult(success=False)``.
"""


class FeedbackError(Exception):
    """Base exception for all feedback errors."""


class TranscriptNotFoundError(FeedbackError):
    """Raised when the transcript to correct does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Transcript not found: {path}")


class OrchestratorError(FeedbackError):
    """Raised when the orchestrator cannot start (e.g. no provider configured)."""
