"""Shared test fixtures for transcript-feedback.

Provides an in-memory entity store, a scripted completion provider, and
a sample transcript with the metadata lines tools rewrite.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from transcript_feedback.models import (
    Entity,
    FeedbackSession,
    Person,
    Project,
    ProjectRouting,
    Term,
)

SAMPLE_TRANSCRIPT = """# Meeting Notes

## Metadata

**Date**: January 15, 2026
**Time**: 02:12 PM

**Project**: Default Project
**Project ID**: `default`

### Routing

**Destination**: /Users/test/notes
**Confidence**: 85.0%

---

## Corrected Transcript

Today we discussed the YB project with San Jay Grouper. He mentioned that the WCMP platform
needs to be updated. YB is on track. We also talked about the API changes.
"""


class FakeEntityStore:
    """In-memory EntityStore that records every save."""

    def __init__(
        self,
        terms: list[Term] | None = None,
        people: list[Person] | None = None,
        projects: list[Project] | None = None,
    ) -> None:
        self.terms = {t.id: t for t in terms or []}
        self.people = {p.id: p for p in people or []}
        self.projects = {p.id: p for p in projects or []}
        self.saved: list[Entity] = []

    def get_term(self, term_id: str) -> Term | None:
        return self.terms.get(term_id)

    def get_person(self, person_id: str) -> Person | None:
        return self.people.get(person_id)

    def get_project(self, project_id: str) -> Project | None:
        return self.projects.get(project_id)

    def get_all_projects(self) -> list[Project]:
        return list(self.projects.values())

    def save_entity(self, entity: Entity) -> None:
        self.saved.append(entity)
        if isinstance(entity, Term):
            self.terms[entity.id] = entity
        elif isinstance(entity, Person):
            self.people[entity.id] = entity


class ScriptedProvider:
    """Completion provider that returns canned responses in sequence.

    Once the script runs out, the last response repeats.
    """

    def __init__(self, responses: list[dict]) -> None:
        self._responses = responses
        self.calls: list[dict] = []

    def complete_with_tools(self, messages: list[dict], tools: list[dict]) -> dict:
        self.calls.append({"messages": [dict(m) for m in messages], "tools": tools})
        idx = min(len(self.calls) - 1, len(self._responses) - 1)
        return self._responses[idx]


def text_reply(text: str = "Nothing to change.") -> dict:
    """Provider response without tool calls."""
    return {"content": text, "tool_calls": []}


def tool_reply(*calls: tuple[str, dict], text: str = "") -> dict:
    """Provider response with one tool call per (name, arguments) pair."""
    return {
        "content": text,
        "tool_calls": [
            {
                "id": f"call_{i}",
                "type": "function",
                "function": {"name": name, "arguments": json.dumps(args)},
            }
            for i, (name, args) in enumerate(calls, start=1)
        ],
    }


def make_projects() -> list[Project]:
    return [
        Project(
            id="quantum-readiness",
            name="Quantum Readiness",
            routing=ProjectRouting(destination="~/notes/quantum", structure="month"),
        ),
        Project(
            id="default",
            name="Default Project",
            routing=ProjectRouting(destination="~/notes", structure="month"),
        ),
        Project(id="inbox", name="Inbox", routing=ProjectRouting()),
    ]


@pytest.fixture()
def store() -> FakeEntityStore:
    return FakeEntityStore(
        terms=[Term(id="kubernetes", name="Kubernetes")],
        people=[Person(id="priya-sharma", name="Priya Sharma", sounds_like=["pre a"])],
        projects=make_projects(),
    )


@pytest.fixture()
def make_session(store):
    """Factory for sessions over SAMPLE_TRANSCRIPT (or custom text)."""

    def _make(
        text: str = SAMPLE_TRANSCRIPT,
        *,
        path: str | Path = "/notes/2026/01/15-1412-meeting-notes.md",
        dry_run: bool = False,
        verbose: bool = False,
    ) -> FeedbackSession:
        return FeedbackSession(
            source_path=Path(path),
            text=text,
            store=store,
            dry_run=dry_run,
            verbose=verbose,
        )

    return _make


@pytest.fixture()
def session(make_session) -> FeedbackSession:
    return make_session()


@pytest.fixture()
def transcript_file(tmp_path) -> Path:
    """SAMPLE_TRANSCRIPT written to a timestamp-named file."""
    path = tmp_path / "inbox" / "15-1412-meeting-notes.md"
    path.parent.mkdir(parents=True)
    path.write_text(SAMPLE_TRANSCRIPT, encoding="utf-8")
    return path
