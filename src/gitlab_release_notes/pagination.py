"""Paginated GET requests against the GitLab REST API.

GitLab returns list endpoints one page at a time and points at the following
page through the ``Link`` response header. ``iter_pages`` follows those links
lazily; ``fetch_all`` drains it into a single list.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Final, TypeVar
from urllib.parse import urljoin

import requests

from .exceptions import FetchError
from .models import Page

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")

LINK_PATTERN: Final[re.Pattern[str]] = re.compile(r'<(.+)>; rel="(.+)"')
PRIVATE_TOKEN_HEADER: Final[str] = "PRIVATE-TOKEN"  # noqa: S105


def parse_next_url(link_header: str | None) -> str | None:
    """Return the ``rel="next"`` target of a Link header, or None.

    Entries that do not look like ``<url>; rel="relation"`` are skipped.
    """
    if not link_header:
        return None
    for link in link_header.split(","):
        match = LINK_PATTERN.fullmatch(link.strip())
        if match is None:
            logger.debug(f"Skipping malformed Link entry: {link!r}")
            continue
        if match.group(2) == "next":
            return match.group(1)
    return None


class PageFetcher:
    """Issues one authenticated GET per page and decodes the JSON array body."""

    api_url: str
    _headers: dict[str, str]
    _session: requests.Session

    def __init__(self, api_url: str, private_token: str | None = None, session: requests.Session | None = None) -> None:
        # urljoin drops the last path segment unless the base ends with a slash
        self.api_url = api_url if api_url.endswith("/") else f"{api_url}/"
        self._headers = {PRIVATE_TOKEN_HEADER: private_token or ""}
        self._session = session or requests.Session()

    def fetch(
        self,
        url: str,
        parse: Callable[[dict[str, Any]], T],
        params: Mapping[str, Any] | None = None,
    ) -> Page[T]:
        """Fetch a single page.

        Args:
            url: Path relative to the API base, or an absolute continuation URL
            parse: Converts one JSON object of the array into a record
            params: Query parameters (only sent with relative URLs)

        Returns:
            The decoded page with the next page's URL, if any

        Raises:
            FetchError: On transport errors, non-2xx responses or unexpected bodies
        """
        absolute = url.startswith(("http://", "https://"))
        full_url = url if absolute else urljoin(self.api_url, url.lstrip("/"))
        logger.debug(f"GET {full_url} params={dict(params or {})}")

        try:
            response = self._session.get(full_url, params=None if absolute else params, headers=self._headers)  # noqa: S113
            response.raise_for_status()
        except requests.RequestException as e:
            msg = f"Failed to fetch {full_url}: {e}"
            raise FetchError(msg) from e

        try:
            body = response.json()
        except ValueError as e:
            msg = f"Response from {full_url} is not valid JSON"
            raise FetchError(msg) from e

        if not isinstance(body, list):
            msg = f"Expected a JSON array from {full_url}, got {type(body).__name__}"
            raise FetchError(msg)

        try:
            items = [parse(entry) for entry in body]
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Unexpected record in response from {full_url}: {e}"
            raise FetchError(msg) from e

        # Link targets may be relative to the URL that returned them
        next_url = parse_next_url(response.headers.get("Link"))
        if next_url is not None:
            next_url = urljoin(response.url or full_url, next_url)
        return Page(items=items, next_url=next_url)


def iter_pages(
    fetcher: PageFetcher,
    url: str,
    parse: Callable[[dict[str, Any]], T],
    params: Mapping[str, Any] | None = None,
) -> Iterator[Page[T]]:
    """Yield pages on demand, following ``next`` links until there are none.

    A blank URL yields nothing.
    """
    next_url: str | None = url
    next_params = params
    while next_url and next_url.strip():
        page = fetcher.fetch(next_url, parse, next_params)
        yield page
        # Continuation links already carry the full query string
        next_url, next_params = page.next_url, None


def fetch_all(
    fetcher: PageFetcher,
    url: str,
    parse: Callable[[dict[str, Any]], T],
    params: Mapping[str, Any] | None = None,
) -> list[T]:
    """Fetch every page and concatenate the items in the order they were returned."""
    items: list[T] = []
    page_count = 0
    for page in iter_pages(fetcher, url, parse, params):
        items.extend(page.items)
        page_count += 1
    logger.debug(f"Fetched {len(items)} item(s) from {url} across {page_count} page(s)")
    return items
