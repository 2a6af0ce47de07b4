"""
GitLab Release Notes Generator

Builds a markdown changelog from the closed issues of a GitLab milestone,
grouped into configured sections, followed by the list of contributors.
"""

from __future__ import annotations

from .cli import main
from .config import ApplicationProperties, GitlabProperties, load_properties
from .exceptions import ConfigurationError, FetchError, MilestoneNotFoundError, ReleaseNotesError
from .generator import ReleaseNotesGenerator
from .sections import Section
from .service import GitlabService

# Package version
__version__ = "0.1.0"

__all__ = [
    "ApplicationProperties",
    "ConfigurationError",
    "FetchError",
    "GitlabProperties",
    "GitlabService",
    "MilestoneNotFoundError",
    "ReleaseNotesError",
    "ReleaseNotesGenerator",
    "Section",
    "load_properties",
    "main",
]
