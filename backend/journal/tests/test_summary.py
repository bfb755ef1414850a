"""
Tests for summary derivation and paging helpers.
"""
import pytest
from journal.core.utils import make_summary, page_to_offset


def test_empty_content():
    assert make_summary("") == ""
    assert make_summary(None) == ""


def test_short_content_unchanged():
    assert make_summary("short entry") == "short entry"
    assert make_summary("a" * 200) == "a" * 200


def test_long_content_truncated():
    summary = make_summary("a" * 201)
    assert summary == "a" * 200 + "..."


def test_truncation_counts_characters_not_bytes():
    summary = make_summary("가" * 250)
    assert summary == "가" * 200 + "..."
    assert len(summary) == 203


@pytest.mark.parametrize("page,page_size,expected", [
    (1, 10, (1, 10, 0)),
    (3, 10, (3, 10, 20)),
    (0, 10, (1, 10, 0)),
    (-5, 10, (1, 10, 0)),
    (2, 0, (2, 20, 20)),
    (1, 101, (1, 20, 0)),
    (1, 100, (1, 100, 0)),
])
def test_page_to_offset(page, page_size, expected):
    assert page_to_offset(page, page_size) == expected
