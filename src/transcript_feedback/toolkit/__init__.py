"""Feedback toolkit: the tool catalog and its executor.

Tool definitions describe the seven feedback tools to the model;
ToolExecutor applies the calls the model makes.
"""

from transcript_feedback.toolkit.definitions import (
    FEEDBACK_TOOLS,
    HELP_TOPICS,
    as_openai_tools,
    get_all_tools,
    get_tool,
)
from transcript_feedback.toolkit.executor import ToolExecutor
from transcript_feedback.toolkit.models import ToolDefinition, ToolName, ToolParameter

__all__ = [
    "FEEDBACK_TOOLS",
    "HELP_TOPICS",
    "ToolDefinition",
    "ToolExecutor",
    "ToolName",
    "ToolParameter",
    "as_openai_tools",
    "get_all_tools",
    "get_tool",
]
