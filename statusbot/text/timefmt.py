# statusbot/text/timefmt.py
"""
Timestamp parsing and rendering for status posts.

The FAA feed mixes two time formats:
- "Dec 13 at 18:00 UTC." for closure start/reopen times
- "11:15 pm EDT" for ground stop end times (wall clock + zone abbreviation)

Rendering is always done in the airport's local zone. When no zone can be
resolved, times are rendered in UTC with an explicit " UTC" suffix.
"""

import re
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

# Abbreviations seen in End_Time values. Each one already states whether
# daylight time applies, so it maps to a fixed-offset zone.
ZONE_ABBREVIATIONS = {
    "UTC": "UTC",
    "GMT": "UTC",
    "Z": "UTC",
    "AST": "Etc/GMT+4",
    "ADT": "Etc/GMT+3",
    "EST": "Etc/GMT+5",
    "EDT": "Etc/GMT+4",
    "CST": "Etc/GMT+6",
    "CDT": "Etc/GMT+5",
    "MST": "Etc/GMT+7",
    "MDT": "Etc/GMT+6",
    "PST": "Etc/GMT+8",
    "PDT": "Etc/GMT+7",
    "AKST": "Etc/GMT+9",
    "AKDT": "Etc/GMT+8",
    "HST": "Etc/GMT+10",
    "HDT": "Etc/GMT+9",
    "SST": "Etc/GMT+11",
    "CHST": "Etc/GMT-10",
}

END_TIME_PATTERN = re.compile(
    r"^(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2})\s*(?P<meridiem>[AaPp][Mm])\s+(?P<zone>[A-Za-z]{1,5})$"
)

FEED_TIMESTAMP_FORMAT = "%Y %b %d at %H:%M UTC."


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def zone_for_abbreviation(abbreviation: str) -> Optional[ZoneInfo]:
    """Map a US zone abbreviation (EDT, PST, ...) to a zone, or None."""
    zone_id = ZONE_ABBREVIATIONS.get(abbreviation.upper())
    if not zone_id:
        return None
    return ZoneInfo(zone_id)


def parse_feed_timestamp(text: Optional[str], now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse "Dec 13 at 18:00 UTC." into an aware UTC datetime.

    The feed omits the year; the current UTC year is used.
    """
    if not isinstance(text, str):
        return None
    year = _now(now).astimezone(timezone.utc).year
    try:
        parsed = datetime.strptime(f"{year} {text.strip()}", FEED_TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)


def parse_end_time(text: Optional[str], now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse "11:15 pm EDT" into an aware UTC datetime.

    The wall clock time is combined with today's date in the named zone.

    Returns:
        UTC datetime, or None if the text or the abbreviation is not recognized
    """
    if not isinstance(text, str):
        return None
    match = END_TIME_PATTERN.match(text.strip())
    if not match:
        return None

    zone = zone_for_abbreviation(match.group("zone"))
    if zone is None:
        return None

    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    if not 1 <= hour <= 12 or minute > 59:
        return None
    hour = hour % 12
    if match.group("meridiem").lower() == "pm":
        hour += 12

    today = _now(now).astimezone(zone).date()
    local = datetime(today.year, today.month, today.day, hour, minute, tzinfo=zone)
    return local.astimezone(timezone.utc)


def render_clock(ts: datetime, zone: Optional[str] = None) -> str:
    """
    Format a timestamp as "h:mm AM/PM" in the given zone.

    Exact midnight renders as "midnight" and exact noon as "noon".
    """
    local = ts.astimezone(ZoneInfo(zone) if zone else timezone.utc)
    if local.minute == 0 and local.hour == 0:
        return "midnight"
    if local.minute == 0 and local.hour == 12:
        return "noon"
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {meridiem}"


def relative_day_qualifier(ts: datetime, zone: Optional[str], now: Optional[datetime] = None) -> Optional[str]:
    """
    Day qualifier for a timestamp relative to now, in the given zone.

    Returns:
        None for the same calendar day, the weekday name ("Thursday") within
        the same ISO week, "<Month> <Day>" within the same year, and None
        for a different year.
    """
    tzinfo = ZoneInfo(zone) if zone else timezone.utc
    local = ts.astimezone(tzinfo)
    current = _now(now).astimezone(tzinfo)

    if local.date() == current.date():
        return None
    if local.isocalendar()[:2] == current.isocalendar()[:2]:
        return local.strftime("%A")
    if local.year == current.year:
        return f"{local.strftime('%B')} {local.day}"
    # TODO: decide how reopen times in a later year should be phrased
    return None


def render_moment(
    ts: datetime,
    zone: Optional[str],
    now: Optional[datetime] = None,
    lead: str = "at",
) -> str:
    """
    Render a timestamp for use inside a sentence.

    "at 9:15 PM", "Thursday at 9:15 PM", "December 13 at 4:59 PM".
    `lead` replaces "at" when there is no day qualifier (use "" after
    "as of"). " UTC" is appended when no zone is known.
    """
    clock = render_clock(ts, zone)
    qualifier = relative_day_qualifier(ts, zone, now)
    if qualifier:
        rendered = f"{qualifier} at {clock}"
    else:
        rendered = f"{lead} {clock}".strip()
    if not zone:
        rendered += " UTC"
    return rendered
