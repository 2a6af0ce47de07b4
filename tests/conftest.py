"""
Pytest configuration and fixtures.

HTTP is faked at the ``requests.Session`` boundary: ``fake_session`` returns a
session whose ``get`` answers with the given responses in order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest
import requests

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def fake_session() -> Callable[..., Mock]:
    def _build(*responses: Mock) -> Mock:
        session = Mock(spec=requests.Session)
        session.get.side_effect = list(responses)
        return session

    return _build
