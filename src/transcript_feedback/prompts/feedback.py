"""System prompt for the feedback agent.

Built once per run from the tool catalog, a truncated preview of the
transcript, and the projects the knowledge base knows about.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from transcript_feedback.toolkit.models import ToolDefinition

PREVIEW_CHARS = 1000

_SYSTEM_PROMPT_TEMPLATE = """\
You are an intelligent feedback processor for a transcription system. Your job is to understand user feedback about transcripts and take appropriate actions.

## Current Transcript Preview
{preview}

## Available Projects
{projects}

## Available Tools
{tools}

## How to Process Feedback

1. **Understand the feedback**: What is the user asking for?
2. **Identify actions**: What tools do you need to use?
3. **Execute in order**:
   - First, make text corrections (correct_text)
   - Then, add context entities (add_term, add_person)
   - Finally, change metadata if needed (change_project, change_title)
4. **Summarize**: Call 'complete' with a summary when done

## Important Rules

- If the user asks for help or seems unsure, use provide_help first
- For name corrections: BOTH fix the text AND add the person to context
- For term corrections: BOTH fix the text AND add the term to context
- When fixing names/terms, use correct_text with replace_all=true
- Be thorough - if "San Jay Grouper" should be "Sanjay Gupta", also consider variations like "San jay", "Sanjay Grouper", etc.
- Always call 'complete' when finished, with a summary of what you did

## Example Interactions

User: "YB should be Wibey"
-> Use correct_text to replace "YB" with "Wibey"
-> Use add_term to add "Wibey" with sounds_like ["YB", "Y B"]
-> Use complete to summarize

User: "San Jay Grouper is actually Sanjay Gupta"
-> Use correct_text to replace "San Jay Grouper" with "Sanjay Gupta"
-> Use correct_text to replace any other variations like "San jay Grouper"
-> Use add_person to add "Sanjay Gupta" with sounds_like ["San Jay Grouper", "Sanjay Grouper"]
-> Use complete to summarize

User: "This should be in the Quantum Readiness project"
-> Use change_project with project_id matching "Quantum Readiness" or similar
-> Use complete to summarize

Respond with tool calls to process the feedback."""


def truncate_preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    """First ``limit`` characters of ``text``, with ``...`` if anything was cut."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def build_system_prompt(
    transcript: str,
    available_projects: Sequence[str],
    tools: Sequence[ToolDefinition],
    *,
    preview_chars: int = PREVIEW_CHARS,
) -> str:
    """Render the feedback agent's system prompt.

    Args:
        transcript: Full current transcript text; only a preview is embedded.
        available_projects: Display strings for known projects, e.g.
            ``"quantum (Quantum Readiness)"``.
        tools: Tool catalog to describe.
        preview_chars: Preview length before truncation.
    """
    projects = (
        ", ".join(available_projects)
        if available_projects
        else "(no projects configured)"
    )
    tool_lines = "\n".join(f"- {tool.name.value}: {tool.description}" for tool in tools)
    return _SYSTEM_PROMPT_TEMPLATE.format(
        preview=truncate_preview(transcript, preview_chars),
        projects=projects,
        tools=tool_lines,
    )
