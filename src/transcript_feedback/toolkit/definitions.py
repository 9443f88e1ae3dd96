"""Hand-crafted definitions for the seven feedback tools.

The order here is the order the tools are described to the model.
"""

from __future__ import annotations

from transcript_feedback.toolkit.models import ToolDefinition, ToolName, ToolParameter

HELP_TOPICS = ("terms", "people", "projects", "corrections", "general")

FEEDBACK_TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name=ToolName.CORRECT_TEXT,
        description=(
            "Replace text in the transcript. Use this to fix misspellings, "
            "wrong terms, or incorrect names."
        ),
        parameters={
            "find": ToolParameter("string", "The text to find in the transcript", required=True),
            "replace": ToolParameter("string", "The text to replace it with", required=True),
            "replace_all": ToolParameter("boolean", "Replace all occurrences (default: true)"),
        },
    ),
    ToolDefinition(
        name=ToolName.ADD_TERM,
        description=(
            "Add a new term to the context so it will be recognized in future "
            "transcripts. Use this when you learn about abbreviations, acronyms, "
            "or technical terms."
        ),
        parameters={
            "term": ToolParameter("string", "The correct term/abbreviation", required=True),
            "definition": ToolParameter("string", "What the term means", required=True),
            "sounds_like": ToolParameter(
                "array",
                "Phonetic variations that might be transcribed incorrectly "
                '(e.g., ["W C M P", "double u see em pee"])',
            ),
            "context": ToolParameter("string", "Additional context about when this term is used"),
        },
    ),
    ToolDefinition(
        name=ToolName.ADD_PERSON,
        description=(
            "Add a new person to the context for future name recognition. Use "
            "this when you learn about people whose names were transcribed "
            "incorrectly."
        ),
        parameters={
            "name": ToolParameter("string", "The correct full name", required=True),
            "sounds_like": ToolParameter(
                "array",
                'Phonetic variations (e.g., ["San Jay", "Sanjai", "Sanjey"])',
                required=True,
            ),
            "role": ToolParameter("string", "Their role or title"),
            "company": ToolParameter("string", "Company they work for"),
            "context": ToolParameter("string", "Additional context about this person"),
        },
    ),
    ToolDefinition(
        name=ToolName.CHANGE_PROJECT,
        description=(
            "Change the project assignment of this transcript. This updates "
            "metadata and may move the file to a new location based on project "
            "routing."
        ),
        parameters={
            "project_id": ToolParameter("string", "The project ID to assign", required=True),
        },
    ),
    ToolDefinition(
        name=ToolName.CHANGE_TITLE,
        description=(
            "Change the title of this transcript. This updates the document "
            "heading and renames the file."
        ),
        parameters={
            "new_title": ToolParameter("string", "The new title for the transcript", required=True),
        },
    ),
    ToolDefinition(
        name=ToolName.PROVIDE_HELP,
        description=(
            "Provide helpful information to the user about what kinds of "
            "feedback they can give."
        ),
        parameters={
            "topic": ToolParameter("string", "The topic to help with", enum=HELP_TOPICS),
        },
    ),
    ToolDefinition(
        name=ToolName.COMPLETE,
        description=(
            "Call this when you have finished processing all the feedback and "
            "applied all necessary changes."
        ),
        parameters={
            "summary": ToolParameter("string", "A summary of what was done", required=True),
        },
    ),
)

_BY_NAME: dict[ToolName, ToolDefinition] = {tool.name: tool for tool in FEEDBACK_TOOLS}


def get_all_tools() -> list[ToolDefinition]:
    """Return the feedback tool catalog in declaration order."""
    return list(FEEDBACK_TOOLS)


def get_tool(name: ToolName) -> ToolDefinition:
    return _BY_NAME[name]


def as_openai_tools() -> list[dict]:
    """Provider-facing schema for every catalog tool."""
    return [tool.to_openai() for tool in FEEDBACK_TOOLS]
