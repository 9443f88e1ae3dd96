"""Core data models for feedback runs.

Entities (Term, Person, Project) are pydantic models shared with the
entity store. Changes and tool results are frozen dataclasses: once a
tool has run, its record is immutable. FeedbackSession is the one
mutable value of a run.
"""

from __future__ import annotations

import difflib
import enum
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, Optional, TypedDict

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from transcript_feedback.protocols import EntityStore


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class RoutingStructure(str, enum.Enum):
    """Date-based directory nesting applied when relocating a transcript."""

    NONE = "none"
    YEAR = "year"
    MONTH = "month"
    DAY = "day"


class ProjectRouting(BaseModel):
    """Where a project's transcripts live."""

    destination: Optional[str] = None  # None = leave the file where it is
    structure: str = RoutingStructure.MONTH.value


class Entity(BaseModel):
    """Fields common to every knowledge-base entity."""

    id: str
    name: str
    type: str
    notes: Optional[str] = None


class Term(Entity):
    type: Literal["term"] = "term"
    expansion: Optional[str] = None
    domain: Optional[str] = None
    sounds_like: Optional[list[str]] = None


class Person(Entity):
    type: Literal["person"] = "person"
    sounds_like: Optional[list[str]] = None
    role: Optional[str] = None
    company: Optional[str] = None
    context: Optional[str] = None


class Project(Entity):
    type: Literal["project"] = "project"
    description: Optional[str] = None
    routing: ProjectRouting = Field(default_factory=ProjectRouting)
    active: bool = True


# ---------------------------------------------------------------------------
# Audit log
# ---------------------------------------------------------------------------


class ChangeKind(str, enum.Enum):
    """Kinds of change a successful tool execution can record."""

    TEXT_CORRECTION = "text_correction"
    TERM_ADDED = "term_added"
    PERSON_ADDED = "person_added"
    PROJECT_CHANGED = "project_changed"
    TITLE_CHANGED = "title_changed"


@dataclass(frozen=True)
class Change:
    """One audit record of a successfully executed tool effect.

    Attributes:
        kind: What kind of effect was applied.
        description: Human-readable one-liner for reports.
        details: Kind-specific payload. ``text_correction`` carries
            ``find``/``replace``/``count``; ``project_changed`` carries
            ``project_id``/``project_name``/``routing``; ``title_changed``
            carries ``new_title``/``slug``.
    """

    kind: ChangeKind
    description: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResult:
    """Structured result from executing a feedback tool.

    Always returned, never raised. Serialized into the ``tool`` turn so the
    model can adapt to failures.
    """

    success: bool
    message: str
    data: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class ToolCallPayload(TypedDict):
    id: str
    type: str
    function: dict[str, str]


class ConversationTurn(TypedDict, total=False):
    """A single message in the orchestrator's conversation history."""

    role: Literal["system", "user", "assistant", "tool"]
    content: str
    tool_call_id: str
    tool_calls: list[ToolCallPayload]


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


@dataclass
class FeedbackSession:
    """Mutable per-run state: document text, audit log, flags, store handle.

    ``text`` starts equal to ``original_text`` and is rewritten by tools;
    ``changes`` is append-only. A session belongs to exactly one run.
    """

    source_path: Path
    text: str
    store: EntityStore
    verbose: bool = False
    dry_run: bool = False
    original_text: str | None = None
    changes: list[Change] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.source_path = Path(self.source_path)
        if self.original_text is None:
            self.original_text = self.text

    @property
    def modified(self) -> bool:
        return self.text != self.original_text

    def record(self, change: Change) -> None:
        self.changes.append(change)

    def first_change(self, kind: ChangeKind) -> Change | None:
        for change in self.changes:
            if change.kind == kind:
                return change
        return None

    def diff(self) -> list[str]:
        """Unified diff lines between the original and current text."""
        return list(difflib.unified_diff(
            self.original_text.splitlines(keepends=True),
            self.text.splitlines(keepends=True),
            fromfile=f"a/{self.source_path.name}",
            tofile=f"b/{self.source_path.name}",
            lineterm="",
        ))
