"""Feedback orchestrator: the bounded tool-calling loop.

Seeds the conversation with a system prompt and the user's feedback,
then repeatedly asks the completion provider what to do, executes the
returned tool calls in order, and feeds each result back as a ``tool``
turn. The loop ends when the model stops calling tools, calls
``complete``, or the iteration ceiling is reached. Nothing is rolled back
when the ceiling is hit.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from transcript_feedback.exceptions import OrchestratorError
from transcript_feedback.orchestrator.config import OrchestratorConfig, OrchestratorState
from transcript_feedback.orchestrator.models import OrchestratorResult, StepResult, ToolCall
from transcript_feedback.prompts.feedback import build_system_prompt
from transcript_feedback.toolkit.definitions import get_all_tools
from transcript_feedback.toolkit.executor import ToolExecutor
from transcript_feedback.toolkit.models import ToolName

if TYPE_CHECKING:
    from rich.console import Console

    from transcript_feedback.llm.protocols import CompletionProvider
    from transcript_feedback.models import ConversationTurn, FeedbackSession

logger = logging.getLogger(__name__)


def parse_arguments(raw: Any, tool_name: str = "") -> dict[str, Any]:
    """Parse a tool call's JSON arguments, degrading to ``{}`` on error.

    The tool's own argument checks then report what is missing, so a
    malformed call costs the model one turn instead of ending the run.
    """
    if isinstance(raw, dict):
        return raw
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Malformed JSON in tool call arguments for %s", tool_name)
        return {}
    if not isinstance(parsed, dict):
        logger.warning("Tool call arguments for %s are not an object", tool_name)
        return {}
    return parsed


class Orchestrator:
    """Runs the feedback conversation for one session.

    Usage::

        session = FeedbackSession(source_path=path, text=text, store=store)
        orch = Orchestrator(session, provider=OpenAIClient())
        result = orch.run("YB should be Wibey")
        print(result.state, len(session.changes))

    Args:
        session: The run's session. Owned by this orchestrator for the run.
        provider: Completion provider exposing ``complete_with_tools``.
        config: Loop configuration; defaults to ``OrchestratorConfig()``.
        executor: Tool executor; defaults to one sharing ``console`` and
            ``logger``.
        console: Where verbose progress goes.
        logger: Logger for diagnostics; defaults to the module logger.
    """

    def __init__(
        self,
        session: FeedbackSession,
        provider: CompletionProvider | None,
        config: OrchestratorConfig | None = None,
        *,
        executor: ToolExecutor | None = None,
        console: Console | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._session = session
        self._provider = provider
        self._config = config or OrchestratorConfig()
        self._console = console
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._executor = executor or ToolExecutor(console=console, logger=self._logger)
        self._state = OrchestratorState.AWAITING_MODEL

    @property
    def state(self) -> OrchestratorState:
        """Return the current orchestrator state."""
        return self._state

    def run(self, feedback: str) -> OrchestratorResult:
        """Process ``feedback`` against the session until a terminal state.

        Returns:
            OrchestratorResult with all steps and the terminal state.

        Raises:
            OrchestratorError: If no provider is configured.
            Exception: Whatever the provider raises; provider failures are
                fatal and propagate unchanged.
        """
        if self._provider is None:
            raise OrchestratorError(
                "No completion provider configured. Pass provider= to Orchestrator."
            )

        tools = get_all_tools()
        tool_schema = [tool.to_openai() for tool in tools]
        messages: list[ConversationTurn] = [
            {"role": "system", "content": self._build_system_prompt(tools)},
            {"role": "user", "content": feedback},
        ]
        steps: list[StepResult] = []
        final_message = ""
        summary: str | None = None
        iteration = 0

        self._state = OrchestratorState.AWAITING_MODEL
        while iteration < self._config.max_iterations:
            iteration += 1
            self._logger.debug("Feedback processing iteration %d", iteration)

            try:
                response = self._provider.complete_with_tools(messages, tool_schema)
            except Exception:
                self._logger.error("Completion provider failed on iteration %d", iteration)
                raise

            content = response.get("content") or ""
            raw_calls = response.get("tool_calls") or []
            if not raw_calls:
                final_message = content
                self._state = OrchestratorState.DONE
                break

            self._state = OrchestratorState.DISPATCHING_TOOLS
            normalized = _normalized(raw_calls)
            tool_calls = self._extract_tool_calls(normalized)
            messages.append({
                "role": "assistant",
                "content": content,
                "tool_calls": [
                    {
                        "id": tc.id,
                        "type": "function",
                        "function": {"name": tc.name, "arguments": raw["function"]["arguments"]},
                    }
                    for tc, raw in zip(tool_calls, normalized)
                ],
            })

            for tc in tool_calls:
                self._announce(tc)
                result = self._executor.execute(tc.name, tc.arguments, self._session)
                step = StepResult(
                    step=len(steps) + 1, iteration=iteration, tool_call=tc, result=result
                )
                steps.append(step)
                messages.append({
                    "role": "tool",
                    "tool_call_id": tc.id,
                    "content": result.to_json(),
                })
                self._notify(step)

                if tc.name == ToolName.COMPLETE.value:
                    summary = result.message if result.success else None
                    self._state = OrchestratorState.DONE
                    break

            if self._state == OrchestratorState.DONE:
                if self._session.verbose and self._console is not None and summary:
                    self._console.print(f"\n{escape(summary)}")
                break
            self._state = OrchestratorState.AWAITING_MODEL

        if not self._state.terminal:
            self._state = OrchestratorState.BUDGET_EXHAUSTED
            self._logger.warning(
                "Feedback processing reached max iterations (%d)",
                self._config.max_iterations,
            )

        return OrchestratorResult(
            state=self._state,
            iterations=iteration,
            steps=steps,
            final_message=final_message,
            summary=summary,
            messages=messages,
        )

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------

    def _build_system_prompt(self, tools: list) -> str:
        if self._config.system_prompt:
            return self._config.system_prompt
        projects = [
            f"{project.id} ({project.name})"
            for project in self._session.store.get_all_projects()
        ]
        return build_system_prompt(
            self._session.text,
            projects,
            tools,
            preview_chars=self._config.preview_chars,
        )

    def _extract_tool_calls(self, raw_calls: list[dict]) -> list[ToolCall]:
        """Parse normalized provider tool calls into ToolCall instances, in order."""
        result: list[ToolCall] = []
        for raw in raw_calls:
            name = raw["function"]["name"]
            result.append(ToolCall(
                id=raw["id"],
                name=name,
                arguments=parse_arguments(raw["function"]["arguments"], name),
            ))
        return result

    def _announce(self, tc: ToolCall) -> None:
        if self._session.verbose and self._console is not None:
            self._console.print(f"\n[dim]\\[Executing: {escape(tc.name)}][/dim]")

    def _notify(self, step: StepResult) -> None:
        if self._config.on_step is None:
            return
        try:
            self._config.on_step(step)
        except Exception:
            self._logger.debug("on_step callback error", exc_info=True)


def _normalized(raw_calls: list[dict]) -> list[dict]:
    """Fill in ids and argument strings a provider may have left out."""
    calls = []
    for raw in raw_calls:
        func = raw.get("function") or {}
        calls.append({
            "id": raw.get("id") or f"call_{uuid.uuid4().hex[:8]}",
            "function": {"name": func.get("name", ""), "arguments": _as_json(func.get("arguments"))},
        })
    return calls


def _as_json(arguments: Any) -> str:
    if arguments is None:
        return "{}"
    if isinstance(arguments, str):
        return arguments
    return json.dumps(arguments)
