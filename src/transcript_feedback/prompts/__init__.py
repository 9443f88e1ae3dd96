"""Prompt templates for the feedback agent."""

from transcript_feedback.prompts.feedback import (
    PREVIEW_CHARS,
    build_system_prompt,
    truncate_preview,
)
from transcript_feedback.prompts.help import HELP_TEXT, get_help_text

__all__ = [
    "HELP_TEXT",
    "PREVIEW_CHARS",
    "build_system_prompt",
    "get_help_text",
    "truncate_preview",
]
