"""Builders for fake GitLab API responses and payloads."""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import requests

API_URL = "https://gitlab.example.com/api/v4/"


def make_response(
    body: Any, *, link: str | None = None, status_code: int = 200, url: str | None = None
) -> Mock:
    """Build a response double; url is the address the response was served from."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.url = url
    response.json.return_value = body
    response.headers = {"Link": link} if link is not None else {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error", response=response)
    else:
        response.raise_for_status.return_value = None
    return response


def issue_json(
    number: int,
    title: str,
    labels: list[str] | None = None,
    *,
    author: str = "alice",
    merge_requests_count: int | None = None,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "iid": number,
        "title": title,
        "web_url": f"https://gitlab.example.com/group/project/-/issues/{number}",
        "author": {"name": author, "web_url": f"https://gitlab.example.com/{author}"},
        "labels": labels or [],
    }
    if merge_requests_count is not None:
        data["merge_requests_count"] = merge_requests_count
    return data


