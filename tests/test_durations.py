# tests/test_durations.py
"""
Test duration phrase parsing and rendering.
"""

import pytest

from statusbot.text.durations import minutes_to_duration_string, parse_duration_string


class TestParseDurationString:
    """Tests for phrase -> minutes."""

    @pytest.mark.parametrize("text,expected", [
        ("46 minutes", 46),
        ("1 minute", 1),
        ("0 minutes", 0),
        ("1 hour", 60),
        ("3 hours", 180),
        ("1 hour and 5 minutes", 65),
        ("1 hour and 15 minutes", 75),
    ])
    def test_parses(self, text, expected):
        assert parse_duration_string(text) == expected

    @pytest.mark.parametrize("text", ["", "soon", "45", None, "minutes"])
    def test_unparseable_is_none(self, text):
        """No clause matched -> None, never 0."""
        assert parse_duration_string(text) is None


class TestMinutesToDurationString:
    """Tests for minutes -> phrase."""

    @pytest.mark.parametrize("minutes,expected", [
        (0, "0 minutes"),
        (1, "1 minute"),
        (45, "45 minutes"),
        (60, "1 hour"),
        (61, "1 hour and 1 minute"),
        (65, "1 hour and 5 minutes"),
        (75, "1 hour and 15 minutes"),
        (120, "2 hours"),
        (185, "3 hours and 5 minutes"),
        (0.5, "30 seconds"),
        (0.25, "15 seconds"),
    ])
    def test_formats(self, minutes, expected):
        assert minutes_to_duration_string(minutes) == expected

    def test_round_trip(self):
        """Whole minutes survive format -> parse."""
        for minutes in (0, 1, 59, 60, 61, 119, 600, 1439):
            assert parse_duration_string(minutes_to_duration_string(minutes)) == minutes
