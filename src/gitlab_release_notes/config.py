"""Configuration for the release notes generator.

Configuration is read from a YAML file shaped like::

    releasenotes:
      gitlab:
        api-url: https://gitlab.example.com/api/v4/
        username: release-bot
        private-token: ...
        repository: group/project
      sections:
        - title: New Features
          emoji: ":star:"
          labels: [enhancement]
        - title: Bug Fixes
          emoji: ":beetle:"
          labels: [bug, regression]

Section order in the file is the order of the headings in the output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

import yaml

from .exceptions import ConfigurationError
from .sections import Section

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_API_URL: Final[str] = "https://gitlab.example.com/api/v4/"
_ROOT_KEY: Final[str] = "releasenotes"


@dataclass
class GitlabProperties:
    """Connection settings for the GitLab instance."""

    api_url: str = DEFAULT_API_URL
    username: str | None = None
    private_token: str = ""
    repository: str | None = None


@dataclass
class ApplicationProperties:
    gitlab: GitlabProperties = field(default_factory=GitlabProperties)
    sections: list[Section] = field(default_factory=list)


def _get(data: dict[str, Any], key: str) -> Any:
    """Look up a kebab-case key, also accepting its snake_case spelling."""
    if key in data:
        return data[key]
    return data.get(key.replace("-", "_"))


def _expect_mapping(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{where}' must be a mapping, got {type(value).__name__}"
        raise ConfigurationError(msg)
    return value


def _parse_section(data: Any, index: int) -> Section:
    data = _expect_mapping(data, f"sections[{index}]")
    title = data.get("title")
    if not title:
        msg = f"sections[{index}] has no title"
        raise ConfigurationError(msg)

    labels = data.get("labels") or []
    if isinstance(labels, str):
        labels = [labels]
    if not isinstance(labels, list):
        msg = f"sections[{index}].labels must be a list of label names"
        raise ConfigurationError(msg)

    return Section(title=str(title), emoji=data.get("emoji") or None, labels=tuple(str(label) for label in labels))


def parse_properties(data: Any) -> ApplicationProperties:
    """Build properties from an already-parsed YAML document."""
    root = _expect_mapping(_expect_mapping(data, "document").get(_ROOT_KEY), _ROOT_KEY)
    gitlab = _expect_mapping(root.get("gitlab"), f"{_ROOT_KEY}.gitlab")

    sections_data = root.get("sections") or []
    if not isinstance(sections_data, list):
        msg = f"'{_ROOT_KEY}.sections' must be a list"
        raise ConfigurationError(msg)

    return ApplicationProperties(
        gitlab=GitlabProperties(
            api_url=_get(gitlab, "api-url") or DEFAULT_API_URL,
            username=_get(gitlab, "username"),
            private_token=_get(gitlab, "private-token") or "",
            repository=_get(gitlab, "repository"),
        ),
        sections=[_parse_section(section, i) for i, section in enumerate(sections_data)],
    )


def load_properties(path: str | Path) -> ApplicationProperties:
    """Load properties from a YAML file.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid
    """
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        msg = f"Cannot read configuration file {path}: {e}"
        raise ConfigurationError(msg) from e
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in configuration file {path}: {e}"
        raise ConfigurationError(msg) from e

    properties = parse_properties(raw or {})
    logger.debug(f"Loaded {len(properties.sections)} section(s) from {path}")
    return properties
