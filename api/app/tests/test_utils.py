from __future__ import annotations

from datetime import datetime, timedelta, timezone

from app.utils.datetime import format_relative_time
from app.utils.text import clean_tags, format_match_score, parse_tags

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_parse_tags_splits_and_strips_hashes():
    assert parse_tags("#korean, spicy  #noodles,,") == ["korean", "spicy", "noodles"]
    assert parse_tags("") == []


def test_clean_tags_trims_and_dedupes():
    assert clean_tags([" a", "b", "a ", "", "  "]) == ["a", "b"]
    assert clean_tags(None) == []


def test_format_match_score():
    assert format_match_score(0.95) == "95%"
    assert format_match_score(0.004) == "0%"


def test_format_relative_time():
    assert format_relative_time(NOW - timedelta(seconds=20), now=NOW) == "just now"
    assert format_relative_time(NOW - timedelta(minutes=5), now=NOW) == "5m ago"
    assert format_relative_time(NOW - timedelta(hours=3), now=NOW) == "3h ago"
    assert format_relative_time(NOW - timedelta(days=2), now=NOW) == "2d ago"
    assert format_relative_time(NOW - timedelta(days=30), now=NOW) == "2024-01-31"


def test_format_relative_time_treats_naive_as_utc():
    naive = datetime(2024, 3, 1, 11, 0)
    assert format_relative_time(naive, now=NOW) == "1h ago"
