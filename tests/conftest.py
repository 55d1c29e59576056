"""Shared fixtures: throwaway git repositories and logger cleanup."""

import logging
import shutil
import subprocess

from pathlib import Path

import pytest


class GitRepo:
    """A minimal helper to script commits and tags in a temporary repo."""

    def __init__(self, path: Path):
        self.path = path
        self.git("init", "--quiet")

    def git(self, *args: str) -> str:
        """Run a git command in the repository and return its output."""
        return subprocess.check_output(
            [
                "git",
                "-c", "user.name=Test Author",
                "-c", "user.email=author@example.com",
                "-c", "commit.gpgsign=false",
                "-c", "tag.gpgsign=false",
                *args,
            ],
            cwd=self.path,
        ).decode("utf-8").strip()

    def commit(self, subject: str, body: str = ""):
        """Create an empty commit with the given message."""
        args = ["commit", "--quiet", "--allow-empty", "-m", subject]
        if body:
            args.extend(["-m", body])
        self.git(*args)

    def tag(self, name: str, annotated: bool = False):
        """Tag HEAD."""
        if annotated:
            self.git("tag", "-a", name, "-m", f"Release {name}")
        else:
            self.git("tag", name)


@pytest.fixture(name="git_repo")
def fixture_git_repo(tmp_path):
    """Return an empty git repository."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    return GitRepo(tmp_path)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop any handlers installed by `setup_logging` during a test."""
    yield

    package_logger = logging.getLogger("nextsemver")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
