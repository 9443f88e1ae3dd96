"""OpenAI-compatible completion provider over httpx, retried with tenacity.

``OpenAIClient.complete_with_tools`` posts one tool-calling chat completion
and reduces the reply to the shape the orchestrator consumes::

    {"content": str, "tool_calls": [{"id", "type", "function": {"name", "arguments"}}]}

Credentials and endpoint come from constructor arguments, then from the
``FEEDBACK_OPENAI_API_KEY`` / ``FEEDBACK_OPENAI_BASE_URL`` environment
variables.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx
import tenacity

from transcript_feedback.llm.errors import (
    LLMAuthError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
DEFAULT_BASE_URL = "https://api.openai.com/v1"

_TRANSIENT_STATUS = frozenset({500, 502, 503, 504})
_AUTH_STATUS = frozenset({401, 403})


def _should_retry(exc: BaseException) -> bool:
    """Rate limits, 5xx responses and failed connects are worth another try."""
    if isinstance(exc, LLMRateLimitError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in _TRANSIENT_STATUS
    return isinstance(exc, (httpx.ConnectError, httpx.ConnectTimeout))


def _retry_after(response: httpx.Response) -> float | None:
    raw = response.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


class OpenAIClient:
    """Sync completion provider for OpenAI-compatible endpoints.

    Satisfies ``CompletionProvider``. Authentication failures (401/403)
    surface at once as ``LLMAuthError``; 429 and 5xx responses are retried
    with exponential backoff plus jitter, up to ``max_retries`` attempts.

    Usage::

        with OpenAIClient(model="gpt-4o-mini") as client:
            reply = client.complete_with_tools(messages, as_openai_tools())

    Args:
        api_key: Bearer token. Falls back to ``FEEDBACK_OPENAI_API_KEY``,
            then ``OPENAI_API_KEY``.
        base_url: Endpoint root. Falls back to ``FEEDBACK_OPENAI_BASE_URL``,
            then the public OpenAI API.
        model: Model name sent with every request.
        timeout: Per-request timeout in seconds.
        max_retries: Total attempts for retryable failures.
        temperature: Sampling temperature; omitted from requests when None.
        max_tokens: Completion token cap; omitted when None.

    Raises:
        LLMConfigError: If no API key can be found.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 120.0,
        max_retries: int = 3,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> None:
        self._api_key = (
            api_key
            or os.environ.get("FEEDBACK_OPENAI_API_KEY")
            or os.environ.get("OPENAI_API_KEY", "")
        )
        if not self._api_key:
            raise LLMConfigError(
                "No API key provided. Pass api_key= or set FEEDBACK_OPENAI_API_KEY."
            )
        self._base_url = (
            base_url or os.environ.get("FEEDBACK_OPENAI_BASE_URL") or DEFAULT_BASE_URL
        ).rstrip("/")
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._max_retries = max_retries
        self._client = httpx.Client(
            timeout=timeout,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            },
        )

    @property
    def model(self) -> str:
        return self._model

    def complete_with_tools(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Ask the model for its next step.

        Returns:
            Normalized reply from the first choice. ``tool_calls`` is empty
            when the model answered in plain text; missing ``arguments`` are
            reported as ``"{}"``.

        Raises:
            LLMAuthError: On 401/403.
            LLMRateLimitError: On 429 once retries are used up.
            LLMResponseError: If the reply carries no usable message.
            httpx.HTTPStatusError: On other non-retryable HTTP errors.
        """
        payload: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "tools": tools,
            "tool_choice": "auto",
        }
        if self._temperature is not None:
            payload["temperature"] = self._temperature
        if self._max_tokens is not None:
            payload["max_tokens"] = self._max_tokens

        data = self._post_with_retry(payload)
        try:
            message = data["choices"][0]["message"]
        except (KeyError, IndexError, TypeError) as exc:
            raise LLMResponseError(f"No message in completion response: {data}") from exc

        return {
            "content": message.get("content") or "",
            "tool_calls": [_tool_call(raw) for raw in message.get("tool_calls") or []],
        }

    def _post_with_retry(self, payload: dict[str, Any]) -> dict[str, Any]:
        # Built per call so max_retries can be changed on a live client.
        retrying = tenacity.Retrying(
            retry=tenacity.retry_if_exception(_should_retry),
            wait=(
                tenacity.wait_exponential(multiplier=1, min=1, max=30)
                + tenacity.wait_random(0, 2)
            ),
            stop=tenacity.stop_after_attempt(self._max_retries),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retrying(self._post, payload)

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = self._client.post(f"{self._base_url}/chat/completions", json=payload)

        if response.status_code in _AUTH_STATUS:
            raise LLMAuthError(
                f"Authentication failed: HTTP {response.status_code} - {response.text}"
            )
        if response.status_code == 429:
            raise LLMRateLimitError(
                f"Rate limited: HTTP 429 - {response.text}",
                retry_after=_retry_after(response),
            )
        response.raise_for_status()

        data = response.json()
        if "choices" not in data:
            raise LLMResponseError(f"Unexpected response format: missing 'choices' key: {data}")
        logger.debug("Completion usage: %s", data.get("usage"))
        return data

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> OpenAIClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _tool_call(raw: dict[str, Any]) -> dict[str, Any]:
    function = raw.get("function") or {}
    return {
        "id": raw.get("id", ""),
        "type": raw.get("type", "function"),
        "function": {
            "name": function.get("name", ""),
            "arguments": function.get("arguments") or "{}",
        },
    }
