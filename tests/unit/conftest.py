# tests/unit/conftest.py

from unittest import mock

import pytest


@pytest.fixture
def mock_spotify_session():
    """ MagicMock session whose next() follows the `_next_page` key of a page """
    session = mock.MagicMock()
    session.next.side_effect = lambda page: page.get("_next_page")
    return session
