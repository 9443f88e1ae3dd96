"""transcript-feedback: turn free-text corrections into transcript edits.

A feedback run hands the user's description of what is wrong to a
tool-calling model, applies the text corrections and metadata changes the
model asks for, teaches the knowledge base new terms and people, and
finally renames or relocates the transcript from the recorded change log.

Usage::

    from transcript_feedback import OpenAIClient, run_feedback

    outcome = run_feedback(
        "notes/15-1412-meeting.md",
        "YB should be Wibey",
        store=my_store,
        provider=OpenAIClient(),
    )
"""

from transcript_feedback._version import __version__
from transcript_feedback.applier import ApplyResult, ChangeApplier
from transcript_feedback.exceptions import (
    FeedbackError,
    OrchestratorError,
    TranscriptNotFoundError,
)
from transcript_feedback.llm import (
    CompletionProvider,
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
    OpenAIClient,
)
from transcript_feedback.models import (
    Change,
    ChangeKind,
    ConversationTurn,
    FeedbackSession,
    Person,
    Project,
    ProjectRouting,
    RoutingStructure,
    Term,
    ToolResult,
)
from transcript_feedback.naming import entity_id, extract_timestamp, slugify_title
from transcript_feedback.orchestrator import (
    Orchestrator,
    OrchestratorConfig,
    OrchestratorResult,
    OrchestratorState,
    StepResult,
    ToolCall,
)
from transcript_feedback.protocols import EntityStore
from transcript_feedback.runner import FeedbackOutcome, run_feedback
from transcript_feedback.toolkit import (
    FEEDBACK_TOOLS,
    ToolDefinition,
    ToolExecutor,
    ToolName,
    ToolParameter,
)

__all__ = [
    # Runs
    "run_feedback",
    "FeedbackOutcome",
    "FeedbackSession",
    # Orchestration
    "Orchestrator",
    "OrchestratorConfig",
    "OrchestratorResult",
    "OrchestratorState",
    "StepResult",
    "ToolCall",
    # Tools
    "FEEDBACK_TOOLS",
    "ToolDefinition",
    "ToolExecutor",
    "ToolName",
    "ToolParameter",
    "ToolResult",
    # Changes
    "Change",
    "ChangeKind",
    "ChangeApplier",
    "ApplyResult",
    # Entities
    "EntityStore",
    "Term",
    "Person",
    "Project",
    "ProjectRouting",
    "RoutingStructure",
    # Provider
    "CompletionProvider",
    "ConversationTurn",
    "OpenAIClient",
    # Helpers
    "entity_id",
    "extract_timestamp",
    "slugify_title",
    # Errors
    "FeedbackError",
    "OrchestratorError",
    "TranscriptNotFoundError",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMResponseError",
]
