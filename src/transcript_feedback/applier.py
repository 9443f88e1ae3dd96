"""Change application: compute a transcript's new path and write it.

The target path is derived only from the session's change log. A title
change renames the file (keeping any ``DD-HHMM`` prefix); a project change
with a routing destination relocates it under a date-based directory.
Title is evaluated before project because the relocation reuses the
renamed basename.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from transcript_feedback.models import ChangeKind, RoutingStructure
from transcript_feedback.naming import extract_timestamp

if TYPE_CHECKING:
    from transcript_feedback.models import FeedbackSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyResult:
    """Where the transcript ended up.

    Attributes:
        new_path: Final path of the transcript.
        moved: True when a project routing relocated the file.
    """

    new_path: Path
    moved: bool = False


def dated_directory(destination: Path, structure: str | None, when: datetime) -> Path:
    """Nest ``destination`` by date according to a routing structure.

    ``year`` -> ``dest/YYYY``, ``month`` -> ``dest/YYYY/MM``,
    ``day`` -> ``dest/YYYY/MM/DD``; anything else leaves ``dest`` as is.
    """
    year = f"{when.year:04d}"
    month = f"{when.month:02d}"
    if structure == RoutingStructure.YEAR.value:
        return destination / year
    if structure == RoutingStructure.MONTH.value:
        return destination / year / month
    if structure == RoutingStructure.DAY.value:
        return destination / year / month / f"{when.day:02d}"
    return destination


class ChangeApplier:
    """Turns a finished session into a file on disk.

    Args:
        now: Clock used for date-based routing. The relocation date is the
            time of application, not any date in the transcript metadata.
        home: Directory a leading ``~`` in a routing destination expands
            to. Defaults to ``$HOME``.
    """

    def __init__(
        self,
        *,
        now: Callable[[], datetime] | None = None,
        home: str | Path | None = None,
    ) -> None:
        self._now = now or datetime.now
        self._home = home

    def compute(self, session: FeedbackSession) -> ApplyResult:
        """Compute the target path from the change log without touching disk."""
        new_path = session.source_path
        moved = False

        title_change = session.first_change(ChangeKind.TITLE_CHANGED)
        if title_change is not None:
            new_path = session.source_path.parent / self._renamed(
                session.source_path, title_change.details["slug"]
            )

        project_change = session.first_change(ChangeKind.PROJECT_CHANGED)
        routing: dict[str, Any] = (project_change.details.get("routing") or {}) if project_change else {}
        if routing.get("destination"):
            destination = self._expand_home(routing["destination"])
            structure = routing.get("structure") or RoutingStructure.MONTH.value
            new_path = dated_directory(destination, structure, self._now()) / new_path.name
            moved = True

        return ApplyResult(new_path=new_path, moved=moved)

    def apply(self, session: FeedbackSession) -> ApplyResult:
        """Compute the target path and, unless dry-run, write the transcript.

        The original file is deleted only when the target is a different file;
        relative and absolute spellings of one path count as the same file. In dry-run
        mode nothing on disk is created, written, or removed.
        """
        result = self.compute(session)
        if session.dry_run:
            logger.info("Dry run: would write transcript to %s", result.new_path)
            return result

        result.new_path.parent.mkdir(parents=True, exist_ok=True)
        result.new_path.write_text(session.text, encoding="utf-8", newline="")
        if not _same_file(result.new_path, session.source_path):
            session.source_path.unlink()

        logger.info("Applied %d changes to transcript", len(session.changes))
        return result

    def _renamed(self, source: Path, slug: str) -> str:
        timestamp = extract_timestamp(source)
        if timestamp is not None:
            return f"{timestamp.prefix}-{slug}.md"
        return f"{slug}.md"

    def _expand_home(self, destination: str) -> Path:
        if not destination.startswith("~"):
            return Path(destination)
        home = self._home if self._home is not None else os.environ.get("HOME", "")
        return Path(home) / destination[1:].lstrip("/\\")


def _same_file(a: Path, b: Path) -> bool:
    return a.resolve() == b.resolve()
