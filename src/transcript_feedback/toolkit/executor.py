"""ToolExecutor: applies feedback tool calls to a FeedbackSession.

Provides a single ``execute()`` method that resolves the tool by name,
checks its required arguments, runs exactly one effect against the
session, and returns a structured ``ToolResult``. Validation failures are
returned, never raised, so the model can read them and adapt.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Callable

from rich.markdown import Markdown
from rich.markup import escape

from transcript_feedback.models import (
    Change,
    ChangeKind,
    Person,
    Term,
    ToolResult,
)
from transcript_feedback.naming import entity_id, slugify_title
from transcript_feedback.prompts.help import get_help_text
from transcript_feedback.toolkit.definitions import get_tool
from transcript_feedback.toolkit.models import ToolName

if TYPE_CHECKING:
    from rich.console import Console

    from transcript_feedback.models import FeedbackSession, Project

logger = logging.getLogger(__name__)

_PROJECT_LINE = re.compile(r"\*\*Project\*\*: [^\r\n]+")
_PROJECT_ID_LINE = re.compile(r"\*\*Project ID\*\*: `[^\r\n]+`")
_TITLE_LINE = re.compile(r"^# [^\r\n]+", re.MULTILINE)

_FALSE_STRINGS = frozenset({"false", "0", "no"})

Handler = Callable[[dict[str, Any], "FeedbackSession"], ToolResult]


def _flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _string_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


class ToolExecutor:
    """Dispatches feedback tool calls and records the resulting changes.

    Usage::

        executor = ToolExecutor(console=get_console())
        result = executor.execute("correct_text", {"find": "YB", "replace": "Wibey"}, session)
        if not result.success:
            print(result.message)

    Args:
        console: Where verbose progress lines and help text go. ``None``
            keeps the executor silent.
        logger: Logger for diagnostics; defaults to the module logger.
    """

    def __init__(
        self,
        *,
        console: Console | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._console = console
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._handlers: dict[ToolName, Handler] = {
            ToolName.CORRECT_TEXT: self._correct_text,
            ToolName.ADD_TERM: self._add_term,
            ToolName.ADD_PERSON: self._add_person,
            ToolName.CHANGE_PROJECT: self._change_project,
            ToolName.CHANGE_TITLE: self._change_title,
            ToolName.PROVIDE_HELP: self._provide_help,
            ToolName.COMPLETE: self._complete,
        }

    def execute(
        self,
        tool_name: str,
        arguments: dict[str, Any],
        session: FeedbackSession,
    ) -> ToolResult:
        """Execute a tool by name against ``session``.

        Args:
            tool_name: Name of the tool the model called.
            arguments: Parsed arguments (may be empty after a parse failure).
            session: The run's session; mutated on success.

        Returns:
            ToolResult with success flag and a message for the model.
        """
        try:
            name = ToolName(tool_name)
        except ValueError:
            self._logger.warning("Unknown tool: %s", tool_name)
            return ToolResult(success=False, message=f"Unknown tool: {tool_name}")

        missing = [key for key in get_tool(name).required if arguments.get(key) is None]
        if missing:
            message = f"Missing required argument(s) for {name.value}: {', '.join(missing)}"
            self._logger.debug(message)
            self._report(session, f"  [red]✗[/red] {escape(message)}")
            return ToolResult(success=False, message=message)

        result = self._handlers[name](arguments, session)
        self._logger.debug(
            "Tool %s -> success=%s (%d changes recorded)",
            name.value, result.success, len(session.changes),
        )
        if not result.success:
            self._report(session, f"  [red]✗[/red] {escape(result.message)}")
        return result

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _correct_text(self, args: dict[str, Any], session: FeedbackSession) -> ToolResult:
        find = str(args["find"])
        replace = str(args["replace"])
        replace_all = _flag(args.get("replace_all"), default=True)

        if not find or find not in session.text:
            return ToolResult(success=False, message=f'Text "{find}" not found in transcript.')

        if replace_all:
            count = session.text.count(find)
            session.text = session.text.replace(find, replace)
        else:
            count = 1
            session.text = session.text.replace(find, replace, 1)

        plural = "s" if count > 1 else ""
        session.record(Change(
            kind=ChangeKind.TEXT_CORRECTION,
            description=f'Replaced "{find}" with "{replace}" ({count} occurrence{plural})',
            details={"find": find, "replace": replace, "count": count},
        ))
        self._report(
            session,
            f'  [green]✓[/green] Replaced "{escape(find)}" → "{escape(replace)}" ({count}x)',
        )
        return ToolResult(
            success=True,
            message=f'Replaced {count} occurrence(s) of "{find}" with "{replace}".',
        )

    def _add_term(self, args: dict[str, Any], session: FeedbackSession) -> ToolResult:
        term = str(args["term"])
        definition = str(args["definition"])
        sounds_like = _string_list(args.get("sounds_like"))
        domain = _optional_str(args.get("context"))

        term_id = entity_id(term)
        if not term_id:
            return ToolResult(success=False, message=f'Cannot derive an id from term "{term}".')
        if session.store.get_term(term_id) is not None:
            return ToolResult(success=False, message=f'Term "{term}" already exists in context.')

        entity = Term(
            id=term_id,
            name=term,
            expansion=definition,
            sounds_like=sounds_like,
            domain=domain,
        )
        if not session.dry_run:
            session.store.save_entity(entity)

        session.record(Change(
            kind=ChangeKind.TERM_ADDED,
            description=f'Added term "{term}" to context',
            details={"term": term, "definition": definition, "sounds_like": sounds_like},
        ))
        self._report(session, f'  [green]✓[/green] Added term: {escape(term)} = "{escape(definition)}"')
        if sounds_like:
            self._report(session, f"    sounds_like: {escape(', '.join(sounds_like))}")
        return ToolResult(
            success=True,
            message=(
                f'Added term "{term}" to context. '
                "It will be recognized in future transcripts."
            ),
            data={"id": term_id, "term": term, "definition": definition},
        )

    def _add_person(self, args: dict[str, Any], session: FeedbackSession) -> ToolResult:
        name = str(args["name"])
        sounds_like = _string_list(args.get("sounds_like")) or []
        role = _optional_str(args.get("role"))
        company = _optional_str(args.get("company"))
        context = _optional_str(args.get("context"))

        person_id = entity_id(name)
        if not person_id:
            return ToolResult(success=False, message=f'Cannot derive an id from name "{name}".')
        if session.store.get_person(person_id) is not None:
            return ToolResult(success=False, message=f'Person "{name}" already exists in context.')

        entity = Person(
            id=person_id,
            name=name,
            sounds_like=sounds_like,
            role=role,
            company=company,
            context=context,
        )
        if not session.dry_run:
            session.store.save_entity(entity)

        session.record(Change(
            kind=ChangeKind.PERSON_ADDED,
            description=f'Added person "{name}" to context',
            details={"name": name, "sounds_like": sounds_like, "role": role, "company": company},
        ))
        self._report(session, f"  [green]✓[/green] Added person: {escape(name)}")
        self._report(session, f"    sounds_like: {escape(', '.join(sounds_like))}")
        if role:
            self._report(session, f"    role: {escape(role)}")
        if company:
            self._report(session, f"    company: {escape(company)}")
        return ToolResult(
            success=True,
            message=(
                f'Added person "{name}" to context. '
                "Their name will be recognized in future transcripts."
            ),
            data={"id": person_id, "name": name, "sounds_like": sounds_like},
        )

    def _change_project(self, args: dict[str, Any], session: FeedbackSession) -> ToolResult:
        project_id = str(args["project_id"])

        project = session.store.get_project(project_id)
        if project is None:
            available = [p.id for p in session.store.get_all_projects()]
            return ToolResult(
                success=False,
                message=f'Project "{project_id}" not found. Available projects: {", ".join(available)}',
            )

        # Lambdas keep backslashes in project names literal.
        session.text = _PROJECT_LINE.sub(
            lambda _m: f"**Project**: {project.name}", session.text, count=1
        )
        session.text = _PROJECT_ID_LINE.sub(
            lambda _m: f"**Project ID**: `{project.id}`", session.text, count=1
        )

        routing = _routing_details(project)
        session.record(Change(
            kind=ChangeKind.PROJECT_CHANGED,
            description=f'Changed project to "{project.name}" ({project.id})',
            details={"project_id": project_id, "project_name": project.name, "routing": routing},
        ))
        destination = routing.get("destination") if routing else None
        self._report(
            session,
            f"  [green]✓[/green] Changed project to: {escape(project.name)} ({escape(project.id)})",
        )
        if destination:
            self._report(session, f"    New destination: {escape(destination)}")
        return ToolResult(
            success=True,
            message=f'Changed project to "{project.name}". The transcript metadata has been updated.',
            data={"project_id": project_id, "destination": destination},
        )

    def _change_title(self, args: dict[str, Any], session: FeedbackSession) -> ToolResult:
        """Rewrite the first H1 heading; with no heading only the change is recorded.

        Fails solely through the shared required-argument check in ``execute``,
        so a call without ``new_title`` records nothing.
        """
        new_title = str(args["new_title"])

        session.text = _TITLE_LINE.sub(lambda _m: f"# {new_title}", session.text, count=1)

        session.record(Change(
            kind=ChangeKind.TITLE_CHANGED,
            description=f'Changed title to "{new_title}"',
            details={"new_title": new_title, "slug": slugify_title(new_title)},
        ))
        self._report(session, f"  [green]✓[/green] Changed title to: {escape(new_title)}")
        return ToolResult(
            success=True,
            message=f'Changed title to "{new_title}". The file will be renamed accordingly.',
            data={"new_title": new_title},
        )

    def _provide_help(self, args: dict[str, Any], session: FeedbackSession) -> ToolResult:
        topic = _optional_str(args.get("topic")) or "general"
        help_text = get_help_text(topic)
        if self._console is not None:
            self._console.print(Markdown(help_text))
        return ToolResult(success=True, message=help_text)

    def _complete(self, args: dict[str, Any], session: FeedbackSession) -> ToolResult:
        return ToolResult(success=True, message=str(args["summary"]), data={"complete": True})

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _report(self, session: FeedbackSession, line: str) -> None:
        if session.verbose and self._console is not None:
            self._console.print(line)


def _routing_details(project: Project) -> dict[str, Any] | None:
    routing = project.routing
    if routing is None:
        return None
    if isinstance(routing, dict):
        return dict(routing)
    return routing.model_dump()
