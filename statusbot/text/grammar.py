# statusbot/text/grammar.py
"""Small English helpers for post text."""

from typing import Union

VOWELS = ("a", "e", "i", "o", "u")


def starts_with_vowel(text: str) -> bool:
    """True if the first non-space character is a vowel."""
    text = text.strip()
    if not text:
        return False
    return text[0].lower() in VOWELS


def indefinite_article(phrase: str) -> str:
    """'a' or 'an' for the given phrase."""
    return "an" if starts_with_vowel(phrase) else "a"


def format_number(value: Union[int, float]) -> str:
    """1000000 -> '1,000,000'."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}"


def hashtag(name: str) -> str:
    """'New Jersey' -> '#NewJersey'."""
    return "#" + "".join(ch for ch in name if ch.isalnum())
