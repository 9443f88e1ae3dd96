"""LLM provider infrastructure for feedback runs.

Provides the CompletionProvider protocol the orchestrator depends on and
an OpenAI-compatible HTTP client that implements it.
"""

from transcript_feedback.llm.client import DEFAULT_MODEL, OpenAIClient
from transcript_feedback.llm.errors import (
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)
from transcript_feedback.llm.protocols import CompletionProvider

__all__ = [
    "DEFAULT_MODEL",
    "OpenAIClient",
    "CompletionProvider",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMResponseError",
]
