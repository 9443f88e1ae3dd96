"""Orchestrator configuration types.

Provides OrchestratorState and OrchestratorConfig for the feedback
agent loop.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from transcript_feedback.prompts.feedback import PREVIEW_CHARS

if TYPE_CHECKING:
    from transcript_feedback.orchestrator.models import StepResult

DEFAULT_MAX_ITERATIONS = 10


class OrchestratorState(str, enum.Enum):
    """States the orchestrator moves through during one run.

    ``DONE`` and ``BUDGET_EXHAUSTED`` are terminal.
    """

    AWAITING_MODEL = "awaiting_model"
    DISPATCHING_TOOLS = "dispatching_tools"
    DONE = "done"
    BUDGET_EXHAUSTED = "budget_exhausted"

    @property
    def terminal(self) -> bool:
        return self in (OrchestratorState.DONE, OrchestratorState.BUDGET_EXHAUSTED)


@dataclass
class OrchestratorConfig:
    """Configuration for the feedback orchestrator.

    Attributes:
        max_iterations: Ceiling on provider round-trips per run.
        preview_chars: Transcript characters embedded in the system prompt.
        system_prompt: Override for the generated system prompt.
        on_step: Callback invoked after each tool execution.
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    preview_chars: int = PREVIEW_CHARS
    system_prompt: str | None = None
    on_step: Callable[[StepResult], None] | None = None
