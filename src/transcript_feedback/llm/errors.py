"""Errors raised by completion providers.

Every provider failure is fatal to a feedback run: the orchestrator logs
and re-raises, so these reach the caller of ``run_feedback``.
"""

from __future__ import annotations

from transcript_feedback.exceptions import FeedbackError


class LLMClientError(FeedbackError):
    """A completion request could not be made or understood."""


class LLMConfigError(LLMClientError):
    """The client is missing configuration it needs, such as an API key."""


class LLMRateLimitError(LLMClientError):
    """HTTP 429 from the provider.

    ``retry_after`` holds the server's Retry-After hint in seconds, when
    one was sent.
    """

    def __init__(self, message: str = "Rate limited", retry_after: float | None = None) -> None:
        if retry_after is not None:
            message = f"{message} (retry after {retry_after}s)"
        super().__init__(message)
        self.retry_after = retry_after


class LLMAuthError(LLMClientError):
    """The provider rejected the credentials (HTTP 401/403)."""


class LLMResponseError(LLMClientError):
    """The provider answered, but not with a usable chat completion."""
