"""Utility functions wrapping git."""

import logging
import os
import subprocess

from pathlib import Path
from typing import Optional, Union

import semver


# git-log record separator appended after every commit
RECORD_SEPARATOR = "\x1e"

LOG_FORMAT = "%s%n%n%b%x1e"

# Substrings of `git describe` errors that mean "no matching tag" (C locale)
NO_TAG_MESSAGES = (
    "No names found",
    "No tags found",
    "No tags can describe",
    "cannot describe anything",
)


class GitCommandError(Exception):
    """Exception to indicate that a git command failed."""

    def __init__(self, args: list[str], stderr: str):
        self.command = args
        self.stderr = stderr.strip()
        super().__init__(f"`{' '.join(args)}` failed: {self.stderr}")


class NoPriorTagError(Exception):
    """Exception to indicate the lack of a matching version tag."""


def run_git(repo_dir: Path, *args: str) -> str:
    """
    Run a git command and return its stripped standard output.

    Raises GitCommandError if the command exits non-zero.
    """
    command = ["git", *args]
    logging.getLogger(__name__).debug("Running `%s`", " ".join(command))

    proc = subprocess.run(
        command,
        cwd=repo_dir,
        env={**os.environ, "LC_ALL": "C", "LANGUAGE": "C"},
        capture_output=True,
        check=False,
    )

    if proc.returncode != 0:
        raise GitCommandError(command, proc.stderr.decode("utf-8", "replace"))

    return proc.stdout.decode("utf-8").strip()


def tag_glob(prefix: str) -> str:
    """Return the `git describe --match` glob for version tags."""
    return f"{prefix}[0-9]*.[0-9]*.[0-9]*"


def tag_to_semver(tag: str, prefix: str = "v") -> semver.version.Version:
    """
    Return the Version associated with this git tag.

    Raises ValueError for invalid tags.
    """
    if not tag.startswith(prefix):
        raise ValueError(f"Tag `{tag}` doesn't start with `{prefix}`")

    return semver.Version.parse(tag[len(prefix):])


def version_to_tag_str(
    version: Union[str, semver.version.Version], prefix: str = "v"
) -> str:
    """Return the git tag associated with this version."""
    return f"{prefix}{version}"


def get_current_branch(repo_dir: Path) -> str:
    """Return the name of the checked-out branch."""
    return run_git(repo_dir, "rev-parse", "--abbrev-ref", "HEAD")


def get_latest_tag(repo_dir: Path, prefix: str) -> str:
    """
    Return the most recent version tag reachable from the current branch.

    Raises NoPriorTagError if there is no such tag.
    """
    branch = get_current_branch(repo_dir)

    try:
        tag = run_git(
            repo_dir,
            "describe",
            "--tags",
            "--abbrev=0",
            "--match",
            tag_glob(prefix),
            branch,
        )
    except GitCommandError as err:
        if any(message in err.stderr for message in NO_TAG_MESSAGES):
            raise NoPriorTagError(
                f"No tags matching `{tag_glob(prefix)}` found on `{branch}`"
            ) from err
        raise

    if not tag:
        raise NoPriorTagError(f"No tags matching `{tag_glob(prefix)}` found")

    return tag


def split_log_output(output: str) -> list[str]:
    """Split record-separated `git log` output into commit message blocks."""
    return [
        block.strip()
        for block in output.split(RECORD_SEPARATOR)
        if block.strip()
    ]


def get_commits(repo_dir: Path, since_tag: Optional[str] = None) -> list[str]:
    """Return the message of every commit after `since_tag` (or all commits)."""
    args = ["log", f"--format={LOG_FORMAT}"]

    if since_tag:
        args.insert(1, f"{since_tag}..HEAD")

    return split_log_output(run_git(repo_dir, *args))


def get_short_hash(repo_dir: Path) -> str:
    """Return the abbreviated hash of HEAD."""
    return run_git(repo_dir, "rev-parse", "--short", "HEAD")
