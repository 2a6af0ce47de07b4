"""Release notes sections and the assignment of issues to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .models import Issue


@dataclass(frozen=True)
class Section:
    """A heading of the release notes and the labels that select its issues."""

    title: str
    emoji: str | None = None
    labels: tuple[str, ...] = ()

    @property
    def heading(self) -> str:
        return f"{self.emoji} {self.title}" if self.emoji else self.title

    def matches(self, issue: Issue) -> bool:
        return not set(self.labels).isdisjoint(issue.labels)


def collate(issues: Iterable[Issue], sections: Sequence[Section]) -> dict[Section, list[Issue]]:
    """Group issues under the first configured section whose labels they carry.

    Sections keep their configured order and issues keep their input order.
    Issues matching no section are left out, as are sections with no issues.
    """
    issues = list(issues)
    claimed: set[int] = set()
    collated: dict[Section, list[Issue]] = {}
    for section in sections:
        selected = []
        for index, issue in enumerate(issues):
            if index not in claimed and section.matches(issue):
                claimed.add(index)
                selected.append(issue)
        if selected:
            collated[section] = selected
    return collated
