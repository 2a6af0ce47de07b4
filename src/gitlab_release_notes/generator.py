"""Generates markdown release notes for a GitLab milestone."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .sections import collate

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from .config import ApplicationProperties
    from .models import Issue, User
    from .sections import Section
    from .service import GitlabService

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

THANK_YOU: Final[str] = (
    "## :heart: Contributors\n\nWe'd like to thank all the contributors who worked on this release!"
)

# An @mention not preceded by a word character or a backtick
MENTION_PATTERN: Final[re.Pattern[str]] = re.compile(r"(^|[^\w`])(@[\w-]+)")


def escape_mentions(text: str) -> str:
    """Wrap @mentions in backticks so GitLab does not notify the mentioned user."""
    return MENTION_PATTERN.sub(r"\1`\2`", text)


def format_issue(issue: Issue) -> str:
    return f"- {escape_mentions(issue.title)} [#{issue.number}]({issue.url})\n"


def format_contributor(user: User) -> str:
    return f"- [@{user.name}]({user.url})\n"


def get_contributors(issues: Iterable[Issue]) -> list[User]:
    """Return the distinct authors of issues backed by a merged merge request.

    Authors are listed in the order they are first seen.
    """
    contributors = (issue.user for issue in issues if issue.pull_request is not None and issue.pull_request.is_merged)
    return list(dict.fromkeys(contributors))


def render(section_issues: Mapping[Section, Sequence[Issue]], contributors: Sequence[User]) -> str:
    """Render collated sections and contributors as a markdown document."""
    content = ""
    for section, issues in section_issues.items():
        if not issues:
            continue
        if content:
            content += "\n"
        content += f"## {section.heading}\n\n"
        content += "".join(format_issue(issue) for issue in issues)

    if contributors:
        content += f"\n{THANK_YOU}\n\n"
        content += "".join(format_contributor(user) for user in contributors)
    return content


class ReleaseNotesGenerator:
    """Writes release notes covering bug fixes, enhancements and contributors."""

    service: GitlabService
    repository: str
    sections: list[Section]

    def __init__(self, service: GitlabService, properties: ApplicationProperties) -> None:
        if not properties.gitlab.repository:
            msg = "A GitLab repository must be configured"
            raise ValueError(msg)
        self.service = service
        self.repository = properties.gitlab.repository
        self.sections = list(properties.sections)

    def generate_content(self, issues: Sequence[Issue]) -> str:
        section_issues = collate(issues, self.sections)
        skipped = len(issues) - sum(len(v) for v in section_issues.values())
        if skipped:
            logger.info(f"{skipped} issue(s) matched no section and were left out")
        return render(section_issues, get_contributors(issues))

    def generate(self, milestone: str, path: str | Path) -> Path:
        """Generate the release notes for a milestone and write them to path.

        Args:
            milestone: Title of the milestone, matched case-insensitively
            path: File to write; overwritten if it exists

        Returns:
            The path written to
        """
        resolved = self.service.get_milestone(milestone, self.repository)
        issues = self.service.get_issues_for_milestone(resolved.title, self.repository)
        content = self.generate_content(issues)

        path = Path(path)
        path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote release notes for '{resolved.title}' to {path}")
        return path
