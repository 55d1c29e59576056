"Compute the next semantic version from Conventional Commit history."

from .classify import BumpLevel, ParsedHeader, classify, classify_commit, parse_header
from .getversion import get_next_version

__all__ = [
    "BumpLevel",
    "ParsedHeader",
    "classify",
    "classify_commit",
    "get_next_version",
    "parse_header",
]
