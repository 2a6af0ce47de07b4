"""
Utility functions for the GitLab release notes generator.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from subprocess import CompletedProcess
from typing import Final

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

_TOKEN_ENV_VAR: Final[str] = "GITLAB_TOKEN"  # noqa: S105
LOG_FILE: Final[str] = "release-notes.log"


class PassError(Exception):
    """Base class for pass-related errors."""


class InvalidPassPathError(PassError):
    """Raised when the pass path does not exist in the password store."""


def setup_logging(*, verbosity: int = 0, log_file: str | None = LOG_FILE) -> None:
    """Configure logging for a release notes run.

    The console shows warnings by default, info with ``-v`` and debug with
    ``-vv``. The log file, if any, always receives debug output.
    """
    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbosity >= 2 else logging.INFO if verbosity == 1 else logging.WARNING)
    handlers: list[logging.Handler] = [console]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def _validate_pass_path(pass_path: str) -> None:
    if not re.fullmatch(r"(?:[A-Za-z0-9_-]+)(?:/[A-Za-z0-9_-]+)*", pass_path):
        msg = f"Invalid pass path: {pass_path}"
        raise ValueError(msg)


def get_pass_value(pass_path: str) -> str:
    """Get value from pass utility at specified path."""
    _validate_pass_path(pass_path)

    try:
        result: CompletedProcess[str] = subprocess.run(  # noqa: S603
            ["pass", pass_path], capture_output=True, text=True, check=True  # noqa: S607
        )
    except subprocess.CalledProcessError as e:
        if e.returncode == 1 and "not in the password store" in e.stderr.lower():
            msg = f"Pass path '{pass_path}' not found or invalid."
            raise InvalidPassPathError(msg) from e
        msg = f"Failed to get value from pass at '{pass_path}'.\nError: {e.stderr.strip()}\nReturn code: {e.returncode}"
        raise PassError(msg) from e

    return result.stdout.strip()


def get_token(pass_path: str | None = None, configured: str | None = None) -> str:
    """Get the GitLab private token.

    Looks at the pass path first, then the GITLAB_TOKEN environment variable,
    then the configured value. An empty token is allowed; the header is
    still sent.
    """
    if pass_path:
        return get_pass_value(pass_path)

    token: str | None = os.environ.get(_TOKEN_ENV_VAR)
    if token:
        return token

    if configured:
        return configured

    logger.warning("No GitLab token specified nor found, requests will be anonymous")
    return ""
