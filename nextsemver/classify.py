"""Classify Conventional Commit messages into semantic version bumps."""

import enum
import re

from dataclasses import dataclass
from typing import Iterable, Optional


class BumpLevel(enum.IntEnum):
    """The magnitude of a semantic version change."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    @property
    def part(self) -> Optional[str]:
        """Return the semver part name bumped by this level (if any)."""
        if self is BumpLevel.NONE:
            return None
        return self.name.lower()


COMMIT_TYPES = (
    "feat",
    "fix",
    "chore",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
)

HEADER_REGEX = re.compile(rf"""
    ^                                   # Start of the subject line
    (?P<type>{'|'.join(COMMIT_TYPES)})  # One of the known commit types
    (?:\((?P<scope>[\w\-]+)\))?         # Optional `(scope)`
    (?P<breaking>!?)                    # Optional `!` breaking marker
    :[ ]                                # Literal `: `
    (?P<description>.+)                 # Rest of the line
    """,
    flags=re.VERBOSE
)

BREAKING_CHANGE_REGEX = re.compile(r"BREAKING CHANGE", flags=re.IGNORECASE)


@dataclass(frozen=True)
class ParsedHeader:
    """The structured subject line of a Conventional Commit."""

    type: str
    scope: Optional[str]
    breaking: bool
    description: str


def parse_header(commit: str) -> Optional[ParsedHeader]:
    """
    Parse the subject line of a commit message block.

    Returns None if the subject is not a Conventional Commit header.
    """
    match = HEADER_REGEX.match(commit)
    if not match:
        return None

    return ParsedHeader(
        type=match["type"],
        scope=match["scope"],
        breaking=match["breaking"] == "!",
        description=match["description"],
    )


def classify_commit(commit: str) -> BumpLevel:
    """Return the bump level implied by a single commit message block."""
    # The marker usually lives in the footer, so search the whole block
    if BREAKING_CHANGE_REGEX.search(commit):
        return BumpLevel.MAJOR

    header = parse_header(commit)
    if header is None:
        return BumpLevel.NONE

    if header.breaking:
        return BumpLevel.MAJOR

    if header.type == "feat":
        return BumpLevel.MINOR

    if header.type == "fix":
        return BumpLevel.PATCH

    return BumpLevel.NONE


def classify(commits: Iterable[str]) -> BumpLevel:
    """Return the highest bump level implied by any of the commits."""
    required_bump = BumpLevel.NONE

    for commit in commits:
        required_bump = max(required_bump, classify_commit(commit))

        if required_bump is BumpLevel.MAJOR:
            break

    return required_bump
