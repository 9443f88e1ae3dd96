"""Completion provider protocol.

The orchestrator only needs one call: send the conversation plus the
tool schema, get back assistant text and any tool calls.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CompletionProvider(Protocol):
    """Protocol for pluggable tool-calling completion providers.

    ``complete_with_tools`` returns a dict shaped like::

        {
            "content": "optional assistant text",
            "tool_calls": [
                {"id": "call_1", "type": "function",
                 "function": {"name": "correct_text", "arguments": "{...}"}},
            ],
        }

    ``arguments`` is the raw JSON string produced by the model. Errors
    (network, auth, malformed responses) are raised, not returned.
    """

    def complete_with_tools(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Send messages and tool schema, return content and tool calls."""
        ...
