# tests/unit/test_filters.py

import logging

import pytest

from better_daily_drive.filters import FilterOtherPkgs, configure_logging


def _record(name, level):
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize("name,level,expected", [
    ("better_daily_drive.sync", logging.INFO, True),
    ("better_daily_drive", logging.DEBUG, True),
    ("spotipy.client", logging.INFO, False),
    ("urllib3.connectionpool", logging.DEBUG, False),
    ("spotipy.client", logging.WARNING, True),
    ("better_daily_drive_other", logging.INFO, False),
])
def test_filter_other_pkgs(name, level, expected):
    assert FilterOtherPkgs().filter(_record(name, level)) is expected


def test_configure_logging_attaches_filtered_handler():
    root = logging.getLogger()
    handler = configure_logging()
    try:
        assert handler in root.handlers
        assert any(isinstance(f, FilterOtherPkgs) for f in handler.filters)
        assert root.level == logging.INFO
    finally:
        root.removeHandler(handler)
