"""Orchestrator result models.

Provides ToolCall, StepResult, and OrchestratorResult for the feedback
agent loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from transcript_feedback.models import ConversationTurn, ToolResult
    from transcript_feedback.orchestrator.config import OrchestratorState


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the model, with parsed arguments."""

    id: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StepResult:
    """Result of a single tool execution within a run.

    Frozen: step results are immutable records of what happened.
    """

    step: int
    iteration: int
    tool_call: ToolCall
    result: ToolResult

    @property
    def success(self) -> bool:
        return self.result.success


@dataclass(frozen=True)
class OrchestratorResult:
    """Final result of an orchestrator run.

    Attributes:
        state: Terminal state (``DONE`` or ``BUDGET_EXHAUSTED``).
        iterations: Provider round-trips made.
        steps: Every tool execution, in order.
        final_message: Assistant text from a response without tool calls.
        summary: Message of the ``complete`` call, if one was made.
        messages: Full conversation history of the run.
    """

    state: OrchestratorState
    iterations: int
    steps: list[StepResult] = field(default_factory=list)
    final_message: str = ""
    summary: str | None = None
    messages: list[ConversationTurn] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        """True if the model signalled completion via the ``complete`` tool."""
        return self.summary is not None

    @property
    def failed_steps(self) -> list[StepResult]:
        return [s for s in self.steps if not s.success]
