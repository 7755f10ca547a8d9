# statusbot/text/durations.py
"""
Duration phrases used by the FAA feed ("1 hour and 15 minutes").

The feed reports delay lengths as English phrases. These are converted to
integer minutes on ingestion and converted back when a post is written.
"""

import math
import re
from typing import Optional, Union

DURATION_PATTERN = re.compile(
    r"^(?:(?P<hours>[0-9]+) hours?(?: and )?)?(?:(?P<minutes>[0-9]+) minutes?)?$"
)


def parse_duration_string(text: Optional[str]) -> Optional[int]:
    """
    Parse a duration phrase into minutes.

    Args:
        text: Phrase such as "46 minutes", "1 hour" or "5 hours and 30 minutes"

    Returns:
        Total minutes, or None if neither an hour nor a minute clause is present.
        Zero is a valid result ("0 minutes") and is distinct from None.
    """
    if not isinstance(text, str):
        return None

    match = DURATION_PATTERN.match(text.strip())
    if not match:
        return None

    hours = match.group("hours")
    minutes = match.group("minutes")
    if hours is None and minutes is None:
        return None

    return int(hours or 0) * 60 + int(minutes or 0)


def _plural(value: Union[int, float], unit: str) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value} {unit}{'' if value == 1 else 's'}"


def minutes_to_duration_string(minutes: Union[int, float]) -> str:
    """
    Render minutes as a duration phrase.

    0 -> "0 minutes", 0.5 -> "30 seconds", 60 -> "1 hour",
    65 -> "1 hour and 5 minutes".
    """
    if 0 < minutes < 1:
        return _plural(math.floor(minutes * 60), "second")

    hours = int(minutes // 60)
    remaining = minutes % 60

    if hours == 0:
        return _plural(remaining, "minute")
    if remaining == 0:
        return _plural(hours, "hour")
    return f"{_plural(hours, 'hour')} and {_plural(remaining, 'minute')}"
