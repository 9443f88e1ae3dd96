"""Filename and identifier helpers.

Slugs name files, entity ids key the knowledge base, and the
``DD-HHMM`` prefix keeps renamed transcripts in chronological order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_DASH_RUN = re.compile(r"--+")
_TIMESTAMP_PREFIX = re.compile(r"^(\d{1,2})-(\d{2})(\d{2})")

SLUG_MAX_LENGTH = 50


@dataclass(frozen=True)
class FilenameTimestamp:
    """Day/hour/minute digits parsed from a ``DD-HHMM-*`` filename.

    The digits are kept as matched so a rebuilt filename preserves them.
    """

    day: str
    hour: str
    minute: str

    @property
    def prefix(self) -> str:
        return f"{self.day}-{self.hour}{self.minute}"


def slugify_title(title: str) -> str:
    """Lowercase, dash-separated, length-capped form of a title."""
    slug = _NON_ALNUM.sub("-", title.lower())
    slug = _DASH_RUN.sub("-", slug).strip("-")
    return slug[:SLUG_MAX_LENGTH]


def entity_id(name: str) -> str:
    """Derive a knowledge-base id from a display name.

    ``"Sanjay Gupta"`` -> ``"sanjay-gupta"``, ``"C++ (lang)"`` -> ``"c-lang"``.
    """
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def extract_timestamp(path: str | PurePath) -> FilenameTimestamp | None:
    """Parse the ``DD-HHMM`` prefix of a transcript filename, if present."""
    stem = PurePath(path).name
    if stem.endswith(".md"):
        stem = stem[: -len(".md")]
    match = _TIMESTAMP_PREFIX.match(stem)
    if match is None:
        return None
    return FilenameTimestamp(day=match.group(1), hour=match.group(2), minute=match.group(3))
