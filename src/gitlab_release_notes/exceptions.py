"""
Custom exception classes for the GitLab release notes generator.
"""

from __future__ import annotations


class ReleaseNotesError(Exception):
    """Base exception for release notes generation errors."""


class FetchError(ReleaseNotesError):
    """Raised when a page cannot be fetched or decoded from the GitLab API."""


class MilestoneNotFoundError(ReleaseNotesError):
    """Raised when no milestone matches the requested title."""


class ConfigurationError(ReleaseNotesError):
    """Raised when the configuration file is missing or malformed."""
