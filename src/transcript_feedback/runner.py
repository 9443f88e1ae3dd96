"""One complete feedback run against a transcript on disk.

Reads the transcript, lets the orchestrator process the feedback, then
either previews (dry run) or applies the resulting changes and reports
them on the console.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from transcript_feedback.applier import ApplyResult, ChangeApplier
from transcript_feedback.exceptions import TranscriptNotFoundError
from transcript_feedback.formatting import (
    format_applied,
    format_diff,
    format_preview,
    get_console,
)
from transcript_feedback.models import FeedbackSession
from transcript_feedback.orchestrator.loop import Orchestrator

if TYPE_CHECKING:
    from rich.console import Console

    from transcript_feedback.llm.protocols import CompletionProvider
    from transcript_feedback.models import Change
    from transcript_feedback.orchestrator.config import OrchestratorConfig
    from transcript_feedback.orchestrator.models import OrchestratorResult
    from transcript_feedback.protocols import EntityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedbackOutcome:
    """What a feedback run did.

    Attributes:
        changes: Ordered change log of the run.
        orchestration: Loop result, or None if no feedback was given.
        applied: Target path computation (and write, unless dry run).
            None when the run produced no changes.
        dry_run: Whether the run was a preview.
    """

    changes: list[Change] = field(default_factory=list)
    orchestration: OrchestratorResult | None = None
    applied: ApplyResult | None = None
    dry_run: bool = False


def run_feedback(
    transcript_path: str | Path,
    feedback: str,
    *,
    store: EntityStore,
    provider: CompletionProvider,
    dry_run: bool = False,
    verbose: bool = False,
    console: Console | None = None,
    config: OrchestratorConfig | None = None,
    applier: ChangeApplier | None = None,
) -> FeedbackOutcome:
    """Process free-text ``feedback`` for the transcript at ``transcript_path``.

    Raises:
        TranscriptNotFoundError: If the transcript does not exist.
    """
    path = Path(transcript_path)
    if not path.is_file():
        raise TranscriptNotFoundError(str(path))

    console = console or get_console()
    feedback = feedback.strip()
    if not feedback:
        console.print("No feedback provided.")
        return FeedbackOutcome(dry_run=dry_run)

    # newline="" keeps CRLF line endings as written
    with path.open(encoding="utf-8", newline="") as fh:
        text = fh.read()
    session = FeedbackSession(
        source_path=path,
        text=text,
        store=store,
        verbose=verbose,
        dry_run=dry_run,
    )

    if verbose:
        console.print("\n[dim]\\[Processing feedback...][/dim]")
    orchestration = Orchestrator(session, provider, config, console=console).run(feedback)
    if orchestration.final_message:
        console.print(f"\n{escape(orchestration.final_message)}")

    if not session.changes:
        console.print("\nNo changes were made.")
        return FeedbackOutcome(orchestration=orchestration, dry_run=dry_run)

    applier = applier or ChangeApplier()
    applied = applier.apply(session)
    if dry_run:
        format_preview(session.changes, applied, session.source_path, console)
        if verbose and session.modified:
            console.print()
            format_diff(session.diff(), console)
    else:
        format_applied(session.changes, applied, session.source_path, console)

    logger.debug(
        "Feedback run finished: state=%s changes=%d new_path=%s",
        orchestration.state.value, len(session.changes), applied.new_path,
    )
    return FeedbackOutcome(
        changes=list(session.changes),
        orchestration=orchestration,
        applied=applied,
        dry_run=dry_run,
    )
