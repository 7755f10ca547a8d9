# tests/test_grammar.py
"""
Test English helpers used in post text.
"""

from statusbot.text.grammar import format_number, hashtag, indefinite_article, starts_with_vowel


class TestStartsWithVowel:
    """Tests for vowel detection."""

    def test_vowels(self):
        assert starts_with_vowel("apple")
        assert starts_with_vowel("  Edge")

    def test_consonants_and_empty(self):
        assert not starts_with_vowel("thunderstorms")
        assert not starts_with_vowel("")
        assert not starts_with_vowel("   ")

    def test_article(self):
        assert indefinite_article("airshow") == "an"
        assert indefinite_article("tornado/hurricane") == "a"


class TestFormatNumber:
    """Tests for thousands separators."""

    def test_separators(self):
        assert format_number(35000) == "35,000"
        assert format_number(900) == "900"
        assert format_number(1000000) == "1,000,000"

    def test_whole_float(self):
        assert format_number(10000.0) == "10,000"


class TestHashtag:
    """Tests for region hashtags."""

    def test_spaces_removed(self):
        assert hashtag("New Jersey") == "#NewJersey"
        assert hashtag("Colorado") == "#Colorado"
