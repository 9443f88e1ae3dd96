"""Static guidance returned by the ``provide_help`` tool."""

from __future__ import annotations

_TERMS = """
**Term Corrections**

You can teach me about abbreviations, acronyms, and technical terms:

- "Everywhere it says WCMP, that should be WCNP - Walmart's Native Cloud Platform"
- "YB should be spelled Wibey"
- "API should be written as A.P.I. in this context"

I'll:
1. Fix the term in this transcript
2. Add it to my vocabulary for future transcripts
"""

_PEOPLE = """
**Name Corrections**

You can teach me about people whose names were transcribed incorrectly:

- "San Jay Grouper is actually Sanjay Gupta"
- "Priya was transcribed as 'pre a' - please fix"
- "Marie should be spelled Mari (without the e)"

I'll:
1. Fix the name everywhere in this transcript
2. Remember how the name sounds for future transcripts
"""

_PROJECTS = """
**Project Assignment**

You can tell me if a transcript belongs to a different project:

- "This should be in the Quantum Readiness project"
- "Move this to the client-alpha project"
- "This was misclassified - it's a personal note, not work"

I'll:
1. Update the project metadata
2. Move the file to the project's configured location
"""

_CORRECTIONS = """
**General Corrections**

You can ask me to fix any text in the transcript:

- "Change 'gonna' to 'going to' everywhere"
- "The date mentioned should be January 15th, not January 5th"
- "Remove the paragraph about lunch - that was a tangent"

I'll make the corrections while preserving the rest of the transcript.
"""

_GENERAL = """
**What I Can Help With**

I can process your feedback to:

1. **Fix Terms & Abbreviations**: "WCMP should be WCNP"
2. **Correct Names**: "San Jay Grouper is Sanjay Gupta"
3. **Change Projects**: "This belongs in the Quantum project"
4. **Update Title**: "Change the title to 'Q1 Planning Session'"
5. **General Corrections**: "Replace X with Y everywhere"

Just describe what's wrong in natural language, and I'll figure out what to do!

Ask about specific topics:
- "How do I correct terms?"
- "How do I fix names?"
- "How do I change the project?"
"""

HELP_TEXT: dict[str, str] = {
    "terms": _TERMS,
    "people": _PEOPLE,
    "projects": _PROJECTS,
    "corrections": _CORRECTIONS,
    "general": _GENERAL,
}


def get_help_text(topic: str | None) -> str:
    """Guidance for ``topic``; unknown or missing topics get the general text."""
    return HELP_TEXT.get(topic or "general", _GENERAL)
