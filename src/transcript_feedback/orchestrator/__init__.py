"""Orchestrator package: the feedback agent loop and its result types."""

from transcript_feedback.orchestrator.config import (
    DEFAULT_MAX_ITERATIONS,
    OrchestratorConfig,
    OrchestratorState,
)
from transcript_feedback.orchestrator.loop import Orchestrator, parse_arguments
from transcript_feedback.orchestrator.models import (
    OrchestratorResult,
    StepResult,
    ToolCall,
)

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "Orchestrator",
    "OrchestratorConfig",
    "OrchestratorResult",
    "OrchestratorState",
    "StepResult",
    "ToolCall",
    "parse_arguments",
]
