"""
Tests for URL and timestamp extraction.
"""

import pytest

from clipcut.parsing import (
    extract_timestamps,
    extract_youtube_url,
    normalize_timestamp,
    to_seconds,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("20.50", "00:20:50"),
        ("20:50", "00:20:50"),
        ("1:02:15", "01:02:15"),
        ("01:02:15", "01:02:15"),
        ("5", "00:00:05"),
        ("1.5", "00:01:05"),
        (" 0:30 ", "00:00:30"),
        ("123:00:00", "123:00:00"),
    ],
)
def test_normalize_timestamp(raw, expected):
    assert normalize_timestamp(raw) == expected


@pytest.mark.parametrize("raw", ["60:00", "1:60", "1:2:3:4", "abc", "1:x", "", "1::2", "-1:00"])
def test_normalize_timestamp_rejects_invalid(raw):
    assert normalize_timestamp(raw) is None


def test_normalize_timestamp_keeps_canonical_form():
    for value in ["00:00:00", "00:59:59", "12:34:56", "99:00:01"]:
        assert normalize_timestamp(value) == value


def test_extract_timestamps_from_sentence():
    assert extract_timestamps("from 1:20 to 2:45") == ("00:01:20", "00:02:45")


def test_extract_timestamps_takes_first_two():
    text = "Cut 20.50 to 21.30 please, not 22:00"
    assert extract_timestamps(text) == ("00:20:50", "00:21:30")


def test_extract_timestamps_keeps_order():
    # Reversed ranges are returned as-is; ordering is checked by the caller
    assert extract_timestamps("2:45 - 1:20") == ("00:02:45", "00:01:20")


def test_extract_timestamps_needs_two_candidates():
    assert extract_timestamps("only one 1:20 here") is None
    assert extract_timestamps("no times at all") is None


def test_extract_timestamps_no_partial_fallback():
    assert extract_timestamps("from 1:75 to 2:45") is None


def test_to_seconds():
    assert to_seconds("00:00:00") == 0
    assert to_seconds("01:02:03") == 3723
    assert to_seconds("00:20:50") == 1250


@pytest.mark.parametrize(
    "text, expected",
    [
        ("https://www.youtube.com/watch?v=abc123", "https://www.youtube.com/watch?v=abc123"),
        ("youtube.com/watch?v=abc123 from 1:00 to 2:00", "youtube.com/watch?v=abc123"),
        ("see https://youtu.be/abc123 now", "https://youtu.be/abc123"),
        ("youtu.be/abc123", "youtu.be/abc123"),
        ("www.youtube.com/shorts/xyz789", "www.youtube.com/shorts/xyz789"),
        ("http://youtube.com/live/stream1", "http://youtube.com/live/stream1"),
        (
            "https://www.youtube.com/watch?feature=share&v=abc123&t=30s",
            "https://www.youtube.com/watch?feature=share&v=abc123&t=30s",
        ),
        ("HTTPS://YOUTU.BE/ABC", "HTTPS://YOUTU.BE/ABC"),
    ],
)
def test_extract_youtube_url(text, expected):
    assert extract_youtube_url(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "no link here",
        "https://vimeo.com/123456",
        "https://youtube.com/",
        "https://example.com/watch?v=abc",
    ],
)
def test_extract_youtube_url_rejects_other_text(text):
    assert extract_youtube_url(text) is None
