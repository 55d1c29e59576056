"""Get the next semantic version from the Conventional Commit history."""

import argparse
import datetime
import logging
import os

from logging import getLogger
from pathlib import Path
from typing import Optional

import semver

from .classify import BumpLevel, classify
from .logging import setup_logging, NOTICE
from .utils import (
    GitCommandError,
    NoPriorTagError,
    get_commits,
    get_latest_tag,
    get_short_hash,
    tag_to_semver,
    version_to_tag_str,
)


SUFFIX_FORMATS = ("short-hash", "datetime")

DATETIME_SUFFIX_FORMAT = "%Y%m%d%H%M%S"

BUMP_EXPLANATIONS = {
    BumpLevel.MAJOR: "Found BREAKING CHANGE or feat!/fix! commit",
    BumpLevel.MINOR: "Found 'feat:' commit",
    BumpLevel.PATCH: "Found 'fix:' commit",
    BumpLevel.NONE: "Only 'chore:', 'docs:', etc. commits found",
}


class InvalidVersionError(ValueError):
    """Exception to indicate an unparseable starting version."""


def parse_baseline(baseline: str, prefix: str = "v") -> semver.version.Version:
    """Parse a baseline version, with or without the tag prefix."""
    version_str = baseline.removeprefix(prefix) if prefix else baseline

    try:
        return semver.Version.parse(version_str)
    except ValueError as err:
        raise InvalidVersionError(
            f"Invalid SemVer baseline format: `{baseline}`"
        ) from err


def get_current_version(
    repo_dir: Path, prefix: str = "v", baseline: Optional[str] = None
) -> semver.version.Version:
    """Return the last released version (or the baseline, if provided)."""
    logger = getLogger(__name__)

    if baseline:
        logger.info("Using baseline version: %s", baseline)
        return parse_baseline(baseline, prefix)

    try:
        tag = get_latest_tag(repo_dir, prefix)
    except NoPriorTagError:
        fallback = semver.Version(0, 0, 0)
        logger.log(
            NOTICE,
            "No SemVer tags with prefix '%s' found. Starting from %s.",
            prefix,
            version_to_tag_str(fallback, prefix),
        )
        return fallback

    try:
        version = tag_to_semver(tag, prefix)
    except ValueError as err:
        raise InvalidVersionError(f"Invalid SemVer tag format: `{tag}`") from err

    logger.info("Last released version: %s", tag)
    return version


def bump_version(
    version: semver.version.Version, level: BumpLevel
) -> semver.version.Version:
    """Apply a bump level to a version."""
    if level.part is None:
        return version

    return version.next_version(part=level.part)


def get_suffix(
    repo_dir: Path,
    suffix_format: str = "short-hash",
    now: Optional[datetime.datetime] = None,
) -> str:
    """Return the build suffix to append to the version (possibly empty)."""
    if suffix_format == "datetime":
        if now is None:
            now = datetime.datetime.now(datetime.timezone.utc)
        return now.strftime(DATETIME_SUFFIX_FORMAT)

    try:
        return get_short_hash(repo_dir)
    except GitCommandError as err:
        getLogger(__name__).error("Error getting short commit hash: %s", err)
        return ""


def get_commits_since_last_tag(repo_dir: Path, prefix: str) -> list[str]:
    """Return the commits after the latest version tag (or all commits)."""
    logger = getLogger(__name__)

    try:
        last_tag = get_latest_tag(repo_dir, prefix)
    except NoPriorTagError:
        logger.info("Analyzing all commits (no previous tag found).")
        return get_commits(repo_dir)

    logger.info("Analyzing commits since %s...", last_tag)
    return get_commits(repo_dir, last_tag)


def get_next_version(
    repo_dir: Path,
    prefix: str = "v",
    baseline: Optional[str] = None,
    add_suffix: bool = False,
    suffix_format: str = "short-hash",
) -> str:
    """Return the next version tag string for the repository."""
    logger = getLogger(__name__)

    current_version = get_current_version(repo_dir, prefix, baseline)
    commits = get_commits_since_last_tag(repo_dir, prefix)

    if not commits:
        logger.info("No new conventional commits since last tag.")
        bump = BumpLevel.NONE
    else:
        bump = classify(commits)
        logger.log(
            NOTICE,
            "Determined BUMP: %s (%s)",
            bump.name,
            BUMP_EXPLANATIONS[bump],
        )

    next_version = bump_version(current_version, bump)
    logger.debug("%s -> %s -> %s", current_version, bump.name, next_version)

    version_str = version_to_tag_str(next_version, prefix)

    if add_suffix:
        if suffix := get_suffix(repo_dir, suffix_format):
            version_str = f"{version_str}-{suffix}"
        logger.info("Suffix added.")
    elif bump is BumpLevel.NONE:
        logger.info("No change detected.")

    return version_str


def entrypoint():
    """Main entrypoint for this module."""
    parser = argparse.ArgumentParser(
        description="Compute the next semantic version from Conventional Commits."
    )
    parser.add_argument(
        "--prefix",
        type=str,
        default="v",
        help="The prefix for the version tag (e.g. 'v', 'k8s')",
    )
    parser.add_argument(
        "--baseline",
        type=str,
        default=None,
        help="A version to use instead of the latest tag (e.g. '1.2.3')",
    )
    parser.add_argument(
        "--add-suffix",
        action="store_true",
        help="Always add a build suffix to the version",
    )
    parser.add_argument(
        "--suffix-format",
        type=str,
        choices=SUFFIX_FORMATS,
        default="short-hash",
        help="The format for the suffix",
    )
    parser.add_argument(
        "--repo-dir",
        type=Path,
        default=Path(),
        help="The git repository to inspect",
    )
    parser.add_argument("--verbose", "-v", action="store_true")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)

    logging.getLogger(__name__).info(
        "--- SemVer Version Bumper (Conventional Commits) ---"
    )

    try:
        next_version = get_next_version(
            args.repo_dir,
            prefix=args.prefix,
            baseline=args.baseline,
            add_suffix=args.add_suffix,
            suffix_format=args.suffix_format,
        )
    except Exception:
        logging.getLogger(__name__).exception("Failed to determine next version")
        raise

    print(next_version)

    if output_file := os.environ.get("GITHUB_OUTPUT"):
        with Path(output_file).open(mode="a", encoding="utf-8") as outfile:
            outfile.write(f"next_version={next_version}\n")
