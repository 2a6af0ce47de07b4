"""Central class for reading milestones and issues from GitLab's REST API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

from .exceptions import MilestoneNotFoundError
from .models import Issue, Milestone
from .pagination import PageFetcher, fetch_all

if TYPE_CHECKING:
    import requests

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

MILESTONES_PATH: Final[str] = "projects/{repository}/milestones"
ISSUES_PATH: Final[str] = "projects/{repository}/issues"


def _project_path(template: str, repository: str) -> str:
    # GitLab accepts "group/project" as an id only when URL-encoded
    return template.format(repository=quote(repository, safe=""))


class GitlabService:
    """Fetches milestones and closed milestone issues, following pagination."""

    fetcher: PageFetcher

    def __init__(self, api_url: str, private_token: str | None = None, session: requests.Session | None = None) -> None:
        self.fetcher = PageFetcher(api_url, private_token, session=session)

    def get_milestones(self, repository: str) -> list[Milestone]:
        return fetch_all(self.fetcher, _project_path(MILESTONES_PATH, repository), Milestone.from_json)

    def get_milestone(self, milestone_title: str, repository: str) -> Milestone:
        """Find a milestone by title, ignoring case.

        Raises:
            ValueError: If the title is blank
            MilestoneNotFoundError: If no milestone has that title
        """
        if not milestone_title or not milestone_title.strip():
            msg = "Milestone title must not be empty"
            raise ValueError(msg)

        wanted = milestone_title.lower()
        for milestone in self.get_milestones(repository):
            if milestone.title.lower() == wanted:
                logger.info(f"Resolved milestone '{milestone_title}' to #{milestone.number}")
                return milestone

        msg = f"Unable to find milestone with title '{milestone_title}' in {repository}"
        raise MilestoneNotFoundError(msg)

    def get_milestone_number(self, milestone_title: str, repository: str) -> int:
        return self.get_milestone(milestone_title, repository).number

    def get_issues_for_milestone(self, milestone: str | int, repository: str) -> list[Issue]:
        """Return every closed issue of the milestone, in API order."""
        issues = fetch_all(
            self.fetcher,
            _project_path(ISSUES_PATH, repository),
            Issue.from_json,
            {"milestone": milestone, "state": "closed"},
        )
        logger.info(f"Fetched {len(issues)} closed issue(s) for milestone {milestone}")
        return issues
