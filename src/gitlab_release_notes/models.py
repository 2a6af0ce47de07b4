"""Data models for issues fetched from the GitLab REST API.

GitLab and GitHub-style payloads name the same things differently
(``iid``/``number``, ``web_url``/``url``, ``author``/``user``). The
``from_json`` constructors accept either so the rest of the package only
deals with these dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def _first(data: dict[str, Any], *keys: str) -> Any:
    """Return the value of the first key present (and not None) in data."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class User:
    """An issue author. Hashable so contributors can be deduplicated."""

    name: str
    url: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> User:
        return cls(
            name=_first(data, "name", "username", "login") or "",
            url=_first(data, "web_url", "url", "html_url") or "",
        )


@dataclass(frozen=True)
class PullRequest:
    """Merge request information attached to an issue."""

    merge_requests_count: int | None = None

    @property
    def is_merged(self) -> bool:
        return self.merge_requests_count is not None and self.merge_requests_count >= 1


@dataclass(frozen=True)
class Issue:
    """A closed issue belonging to a milestone."""

    number: int
    title: str
    url: str
    user: User
    labels: tuple[str, ...] = ()
    pull_request: PullRequest | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Issue:
        user_data = _first(data, "author", "user") or {}
        labels = tuple(
            label["name"] if isinstance(label, dict) else str(label) for label in data.get("labels") or []
        )
        return cls(
            number=int(_first(data, "iid", "number")),
            title=data.get("title") or "",
            url=_first(data, "web_url", "url", "html_url") or "",
            user=User.from_json(user_data),
            labels=labels,
            pull_request=_parse_pull_request(data),
        )


def _parse_pull_request(data: dict[str, Any]) -> PullRequest | None:
    """Read merge request info from a nested object or GitLab's top-level count."""
    nested = data.get("pull_request")
    if isinstance(nested, dict):
        count = nested.get("merge_requests_count")
        return PullRequest(merge_requests_count=int(count) if count is not None else None)
    if data.get("merge_requests_count") is not None:
        return PullRequest(merge_requests_count=int(data["merge_requests_count"]))
    return None


@dataclass(frozen=True)
class Milestone:
    """A milestone, resolved once per run from its title."""

    number: int
    title: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Milestone:
        return cls(number=int(_first(data, "id", "number", "iid")), title=data.get("title") or "")


@dataclass
class Page(Generic[T]):
    """One batch of API results.

    ``next_url`` is the continuation link taken from the response's ``Link``
    header, or None when this is the last page.
    """

    items: list[T] = field(default_factory=list)
    next_url: str | None = None
