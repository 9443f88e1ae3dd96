"""Tests for ToolExecutor: every feedback tool, its failures, and dry-run.

Tests cover text corrections, entity additions against the store,
project and title metadata rewrites, help, completion, unknown tools,
missing arguments, and verbose console output.
"""

from __future__ import annotations

import io

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from rich.console import Console

from transcript_feedback import (
    ChangeKind,
    FeedbackSession,
    Person,
    Term,
    ToolExecutor,
)
from transcript_feedback.prompts.help import HELP_TEXT

from tests.conftest import FakeEntityStore


@pytest.fixture()
def executor() -> ToolExecutor:
    return ToolExecutor()


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, force_terminal=False, width=200), buf


# ===========================================================================
# correct_text
# ===========================================================================


class TestCorrectText:

    def test_basic_replacement(self, executor, make_session):
        session = make_session("Test content\nWith some lines\nTo edit")
        result = executor.execute("correct_text", {"find": "Test", "replace": "Demo"}, session)

        assert result.success
        assert "Test" not in session.text
        assert session.text == "Demo content\nWith some lines\nTo edit"
        assert len(session.changes) == 1
        change = session.changes[0]
        assert change.kind == ChangeKind.TEXT_CORRECTION
        assert change.details == {"find": "Test", "replace": "Demo", "count": 1}

    def test_replace_all_is_default(self, executor, session):
        result = executor.execute("correct_text", {"find": "YB", "replace": "Wibey"}, session)

        assert result.success
        assert "YB" not in session.text
        assert session.text.count("Wibey") == 2
        assert session.changes[0].details["count"] == 2
        assert "2 occurrences" in session.changes[0].description

    def test_replace_first_only(self, executor, session):
        result = executor.execute(
            "correct_text",
            {"find": "YB", "replace": "Wibey", "replace_all": False},
            session,
        )

        assert result.success
        assert session.text.count("Wibey") == 1
        assert session.text.count("YB") == 1
        assert session.text.index("Wibey") < session.text.index("YB")
        assert session.changes[0].details["count"] == 1

    def test_replace_all_string_false(self, executor, session):
        executor.execute(
            "correct_text",
            {"find": "YB", "replace": "Wibey", "replace_all": "false"},
            session,
        )
        assert session.text.count("YB") == 1

    def test_missing_text_fails_without_mutation(self, executor, session):
        before = session.text
        result = executor.execute(
            "correct_text", {"find": "NotPresent", "replace": "X"}, session
        )

        assert not result.success
        assert "not found" in result.message
        assert session.text == before
        assert session.changes == []

    def test_empty_replacement_deletes(self, executor, make_session):
        session = make_session("um, so, um, yes")
        result = executor.execute("correct_text", {"find": "um, ", "replace": ""}, session)

        assert result.success
        assert session.text == "so, yes"

    def test_empty_find_fails(self, executor, session):
        result = executor.execute("correct_text", {"find": "", "replace": "X"}, session)
        assert not result.success
        assert session.changes == []

    @settings(max_examples=50, deadline=None)
    @given(
        n=st.integers(min_value=1, max_value=20),
        filler=st.text(alphabet="abc \n", max_size=10),
    )
    def test_replace_all_counts_every_occurrence(self, n, filler):
        session = FeedbackSession(
            source_path="/t/x.md",
            text=filler.join(["ZQ"] * n) + filler,
            store=FakeEntityStore(),
        )
        result = ToolExecutor().execute(
            "correct_text", {"find": "ZQ", "replace": "Q"}, session
        )

        assert result.success
        assert "ZQ" not in session.text
        assert session.changes[0].details["count"] == n

    @settings(max_examples=25, deadline=None)
    @given(n=st.integers(min_value=1, max_value=20))
    def test_replace_first_replaces_exactly_one(self, n):
        session = FeedbackSession(
            source_path="/t/x.md", text=" ".join(["ZQ"] * n), store=FakeEntityStore()
        )
        ToolExecutor().execute(
            "correct_text", {"find": "ZQ", "replace": "Q", "replace_all": False}, session
        )

        assert session.text.count("ZQ") == n - 1
        assert session.changes[0].details["count"] == 1


# ===========================================================================
# add_term / add_person
# ===========================================================================


class TestAddTerm:

    def test_adds_term(self, executor, session, store):
        result = executor.execute(
            "add_term",
            {
                "term": "WCNP",
                "definition": "Walmart Native Cloud Platform",
                "sounds_like": ["WCMP", "W C M P"],
                "context": "devops",
            },
            session,
        )

        assert result.success
        assert result.data == {
            "id": "wcnp", "term": "WCNP", "definition": "Walmart Native Cloud Platform",
        }
        saved = store.saved[-1]
        assert isinstance(saved, Term)
        assert saved.id == "wcnp"
        assert saved.expansion == "Walmart Native Cloud Platform"
        assert saved.sounds_like == ["WCMP", "W C M P"]
        assert saved.domain == "devops"
        assert session.changes[0].kind == ChangeKind.TERM_ADDED
        assert session.changes[0].details["sounds_like"] == ["WCMP", "W C M P"]

    def test_id_derivation(self, executor, session, store):
        executor.execute(
            "add_term", {"term": "  C++ / Rust -- Interop!", "definition": "x"}, session
        )
        assert store.saved[-1].id == "c-rust-interop"

    def test_duplicate_fails(self, executor, session, store):
        result = executor.execute(
            "add_term", {"term": "Kubernetes", "definition": "k8s"}, session
        )

        assert not result.success
        assert "already exists" in result.message
        assert store.saved == []
        assert session.changes == []

    def test_dry_run_skips_save_but_records_change(self, executor, make_session, store):
        session = make_session(dry_run=True)
        result = executor.execute("add_term", {"term": "Wibey", "definition": "tool"}, session)

        assert result.success
        assert store.saved == []
        assert len(session.changes) == 1
        assert session.changes[0].kind == ChangeKind.TERM_ADDED

    def test_single_sounds_like_string(self, executor, session, store):
        executor.execute(
            "add_term", {"term": "Wibey", "definition": "tool", "sounds_like": "YB"}, session
        )
        assert store.saved[-1].sounds_like == ["YB"]

    def test_unusable_name_fails(self, executor, session, store):
        result = executor.execute("add_term", {"term": "!!!", "definition": "x"}, session)
        assert not result.success
        assert store.saved == []


class TestAddPerson:

    def test_adds_person(self, executor, session, store):
        result = executor.execute(
            "add_person",
            {
                "name": "Sanjay Gupta",
                "sounds_like": ["San Jay Grouper", "Sanjay Grouper"],
                "role": "Architect",
                "company": "Acme",
            },
            session,
        )

        assert result.success
        saved = store.saved[-1]
        assert isinstance(saved, Person)
        assert saved.id == "sanjay-gupta"
        assert saved.role == "Architect"
        assert saved.company == "Acme"
        assert session.changes[0].kind == ChangeKind.PERSON_ADDED
        assert session.changes[0].details == {
            "name": "Sanjay Gupta",
            "sounds_like": ["San Jay Grouper", "Sanjay Grouper"],
            "role": "Architect",
            "company": "Acme",
        }

    def test_duplicate_fails(self, executor, session, store):
        result = executor.execute(
            "add_person", {"name": "Priya Sharma", "sounds_like": ["pria"]}, session
        )
        assert not result.success
        assert "already exists" in result.message
        assert session.changes == []

    def test_dry_run_never_saves(self, executor, make_session, store):
        session = make_session(dry_run=True)
        executor.execute("add_person", {"name": "Mari", "sounds_like": ["Marie"]}, session)
        executor.execute("add_person", {"name": "Priya Sharma", "sounds_like": ["x"]}, session)

        assert store.saved == []
        assert [c.kind for c in session.changes] == [ChangeKind.PERSON_ADDED]

    def test_sounds_like_required(self, executor, session, store):
        result = executor.execute("add_person", {"name": "Mari"}, session)
        assert not result.success
        assert "sounds_like" in result.message
        assert store.saved == []


# ===========================================================================
# change_project / change_title
# ===========================================================================


class TestChangeProject:

    def test_rewrites_metadata_lines(self, executor, session):
        result = executor.execute(
            "change_project", {"project_id": "quantum-readiness"}, session
        )

        assert result.success
        assert "**Project**: Quantum Readiness" in session.text
        assert "**Project ID**: `quantum-readiness`" in session.text
        assert "Default Project" not in session.text
        assert result.data == {
            "project_id": "quantum-readiness", "destination": "~/notes/quantum",
        }

    def test_records_routing(self, executor, session):
        executor.execute("change_project", {"project_id": "quantum-readiness"}, session)

        change = session.changes[0]
        assert change.kind == ChangeKind.PROJECT_CHANGED
        assert change.details["project_id"] == "quantum-readiness"
        assert change.details["project_name"] == "Quantum Readiness"
        assert change.details["routing"]["destination"] == "~/notes/quantum"
        assert change.details["routing"]["structure"] == "month"

    def test_unknown_project_lists_known_ids(self, executor, session, store):
        before = session.text
        result = executor.execute("change_project", {"project_id": "nope"}, session)

        assert not result.success
        for project_id in store.projects:
            assert project_id in result.message
        assert session.text == before
        assert session.changes == []

    def test_no_metadata_lines_is_silent_noop(self, executor, make_session):
        session = make_session("# Title\n\nJust text.")
        result = executor.execute("change_project", {"project_id": "inbox"}, session)

        assert result.success
        assert session.text == "# Title\n\nJust text."
        assert len(session.changes) == 1

    def test_crlf_line_endings_preserved(self, executor, make_session):
        session = make_session("**Project**: Old\r\n**Project ID**: `old`\r\nbody\r\n")
        executor.execute("change_project", {"project_id": "inbox"}, session)

        assert session.text == "**Project**: Inbox\r\n**Project ID**: `inbox`\r\nbody\r\n"


class TestChangeTitle:

    def test_rewrites_first_heading(self, executor, session):
        result = executor.execute(
            "change_title", {"new_title": "Q1 Planning Session"}, session
        )

        assert result.success
        assert session.text.startswith("# Q1 Planning Session\n")
        assert "## Metadata" in session.text
        change = session.changes[0]
        assert change.kind == ChangeKind.TITLE_CHANGED
        assert change.details == {
            "new_title": "Q1 Planning Session", "slug": "q1-planning-session",
        }

    def test_no_heading_still_records(self, executor, make_session):
        session = make_session("No heading here\nJust text.")
        result = executor.execute("change_title", {"new_title": "Fresh Title!"}, session)

        assert result.success
        assert session.text == "No heading here\nJust text."
        assert session.changes[0].details["slug"] == "fresh-title"

    def test_backslashes_in_title_are_literal(self, executor, make_session):
        session = make_session("# Old\n")
        executor.execute("change_title", {"new_title": r"C:\temp\1"}, session)
        assert session.text == "# C:\\temp\\1\n"

    def test_crlf_line_endings_preserved(self, executor, make_session):
        session = make_session("# Old\r\nbody\r\n")
        executor.execute("change_title", {"new_title": "New"}, session)
        assert session.text == "# New\r\nbody\r\n"

    def test_missing_title_records_nothing(self, executor, session):
        before = session.text
        result = executor.execute("change_title", {}, session)

        assert not result.success
        assert "new_title" in result.message
        assert session.text == before
        assert session.changes == []


# ===========================================================================
# provide_help / complete / unknown
# ===========================================================================


class TestHelpAndComplete:

    @pytest.mark.parametrize("topic", ["terms", "people", "projects", "corrections", "general"])
    def test_help_topics(self, executor, session, topic):
        result = executor.execute("provide_help", {"topic": topic}, session)
        assert result.success
        assert result.message == HELP_TEXT[topic]
        assert session.changes == []

    def test_help_defaults_to_general(self, executor, session):
        result = executor.execute("provide_help", {}, session)
        assert result.message == HELP_TEXT["general"]

    def test_help_printed_to_console(self, session):
        console, buf = _console()
        ToolExecutor(console=console).execute("provide_help", {"topic": "people"}, session)
        assert "Name Corrections" in buf.getvalue()

    def test_complete(self, executor, session):
        result = executor.execute("complete", {"summary": "Fixed YB."}, session)
        assert result.success
        assert result.message == "Fixed YB."
        assert result.data == {"complete": True}
        assert session.changes == []

    def test_unknown_tool(self, executor, session, caplog):
        with caplog.at_level("WARNING"):
            result = executor.execute("delete_everything", {}, session)

        assert not result.success
        assert "Unknown tool" in result.message
        assert "delete_everything" in caplog.text

    def test_missing_arguments(self, executor, session):
        before = session.text
        result = executor.execute("correct_text", {}, session)

        assert not result.success
        assert "find" in result.message and "replace" in result.message
        assert session.text == before
        assert session.changes == []


# ===========================================================================
# Invariants and output
# ===========================================================================


class TestExecutorInvariants:

    def test_changes_match_successful_mutations(self, executor, session):
        calls = [
            ("correct_text", {"find": "YB", "replace": "Wibey"}),
            ("correct_text", {"find": "missing", "replace": "x"}),
            ("add_term", {"term": "Wibey", "definition": "tool"}),
            ("add_term", {"term": "Wibey", "definition": "tool"}),
            ("change_project", {"project_id": "ghost"}),
            ("change_title", {"new_title": "Renamed"}),
            ("provide_help", {}),
            ("nonsense", {}),
        ]
        results = [executor.execute(name, args, session) for name, args in calls]

        assert [r.success for r in results] == [True, False, True, False, False, True, True, False]
        assert [c.kind for c in session.changes] == [
            ChangeKind.TEXT_CORRECTION,
            ChangeKind.TERM_ADDED,
            ChangeKind.TITLE_CHANGED,
        ]

    def test_original_text_preserved(self, executor, session):
        original = session.text
        executor.execute("correct_text", {"find": "YB", "replace": "Wibey"}, session)

        assert session.original_text == original
        assert session.modified
        assert any(line.startswith("+") and "Wibey" in line for line in session.diff())

    def test_verbose_prints_one_line_per_change(self, make_session):
        console, buf = _console()
        session = make_session(verbose=True)
        ToolExecutor(console=console).execute(
            "correct_text", {"find": "YB", "replace": "Wibey"}, session
        )

        assert 'Replaced "YB" → "Wibey" (2x)' in buf.getvalue()

    def test_quiet_when_not_verbose(self, make_session):
        console, buf = _console()
        session = make_session(verbose=False)
        ToolExecutor(console=console).execute(
            "correct_text", {"find": "YB", "replace": "Wibey"}, session
        )
        assert buf.getvalue() == ""

    def test_verbose_failure_line(self, make_session):
        console, buf = _console()
        session = make_session(verbose=True)
        ToolExecutor(console=console).execute("change_project", {"project_id": "ghost"}, session)
        assert "✗" in buf.getvalue()
        assert "ghost" in buf.getvalue()
