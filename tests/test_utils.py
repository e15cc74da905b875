"""Tests for utility functions."""

import pytest
from datetime import datetime, timedelta

from cadence.core.utils import format_duration, format_local


class TestFormatDuration:
    """Tests for format_duration."""

    @pytest.mark.parametrize(
        "duration,expected",
        [
            (timedelta(days=6, hours=23, minutes=55), "6d 23h 55m"),
            (timedelta(hours=3), "3h"),
            (timedelta(days=4, hours=2), "4d 2h"),
            (timedelta(minutes=1, seconds=5), "1m 5s"),
            (timedelta(milliseconds=50), "50ms"),
            (timedelta(0), "0s"),
            (timedelta(seconds=-3), "0s"),
        ],
    )
    def test_format(self, duration, expected):
        assert format_duration(duration) == expected


class TestFormatLocal:
    """Tests for format_local."""

    def test_naive(self):
        assert format_local(datetime(2024, 1, 3, 13, 5)) == "2024-01-03 13:05:00"
