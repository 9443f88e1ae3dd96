"""Entity store protocol.

The knowledge base lives outside this package; anything with these
methods can back a feedback run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from transcript_feedback.models import Entity, Person, Project, Term


@runtime_checkable
class EntityStore(Protocol):
    """Read/write access to terms, people, and projects."""

    def get_term(self, term_id: str) -> Term | None:
        ...

    def get_person(self, person_id: str) -> Person | None:
        ...

    def get_project(self, project_id: str) -> Project | None:
        ...

    def get_all_projects(self) -> list[Project]:
        ...

    def save_entity(self, entity: Entity) -> None:
        """Persist a new or updated entity."""
        ...
