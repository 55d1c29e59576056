"""Module to handle logging to the console or to GitHub Actions."""

import logging
import os


NOTICE = 25


class GHAFilter(logging.Filter):
    """A logging filter that emits GitHub Actions workflow commands."""

    # pylint: disable=too-few-public-methods

    prefixes = {
        logging.DEBUG: "::debug::",
        logging.INFO: "",
        NOTICE: "::notice::",
        logging.WARNING: "::warning::",
        logging.ERROR: "::error::",
        logging.CRITICAL: "::error::",
    }

    def filter(self, record):
        record.ghaprefix = self.prefixes.get(record.levelno, "")
        return True


def running_in_github_actions() -> bool:
    """Return True if this process is running inside a GitHub Actions job."""
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


def setup_logging(verbose: bool = False):
    """Set up logging to stderr for the package root logger."""
    root_logger = logging.getLogger(__name__.rpartition(".")[0])

    if logging.getLevelName("NOTICE") != NOTICE:
        logging.addLevelName(NOTICE, "NOTICE")

    # Re-entrant: only ever attach a single handler
    if not root_logger.handlers:
        handler = logging.StreamHandler()

        if running_in_github_actions():
            handler.setFormatter(logging.Formatter("%(ghaprefix)s%(message)s"))
            handler.addFilter(GHAFilter())
        else:
            handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

        root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers:
        handler.setLevel(logging.DEBUG if verbose else logging.INFO)
