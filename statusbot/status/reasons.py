# statusbot/status/reasons.py
"""
Reason code classification.

The FAA feed reports the cause of a delay as a colon-delimited path
("WX:Fog", "TM Initiatives:MIT:VOL", "ZDC/VOL:Volume"). Ground delay and
ground stop entries instead carry free text ("wind", "snow or ice"), so
every reason first passes through a synonym table that rewrites free text
into the path vocabulary used everywhere else.

Classification never raises. A code with no table entry resolves to an
unclassified reason, and posts omit the "due to ..." clause.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional


class ReasonCategory(str, Enum):
    """First path segment of a reason code."""
    WEATHER = "WX"
    TRAFFIC_MANAGEMENT = "TM Initiatives"
    RUNWAY = "RWY"
    TAXIWAY = "TWY"
    VOLUME = "VOL"
    STAFF = "STAFF"
    EQUIPMENT = "EQ"
    VIP_MOVEMENT = "VIP"
    OTHER = "OTHER"


class ImageHint(str, Enum):
    """Image that should accompany a post."""
    WEATHER_RADAR = "weather_radar"
    GEOGRAPHIC_OVERLAY = "geographic_overlay"


_CATEGORY_BY_CODE = {category.value.lower(): category for category in ReasonCategory}

# Exact-case entries are checked before the lower-cased lookup, so an
# exact entry wins when the feed has used both spellings of one concept.
SYNONYMS: Mapping[str, str] = MappingProxyType({
    # exact case
    "TSTMS": "WX:Thunderstorms",
    "LOW CIGS": "WX:Low Ceilings",
    "LOW VIS": "WX:Low Visibility",
    "VIP": "VIP:VIP Movement",
    "RWY CONFIG": "RWY:Configuration Change",
    # lower case
    "wind": "WX:Wind",
    "fog": "WX:Fog",
    "low ceilings": "WX:Low Ceilings",
    "thunderstorms": "WX:Thunderstorms",
    "thunderstorm": "WX:Thunderstorms",
    "snow or ice": "WX:Snow/Ice",
    "snow/ice": "WX:Snow/Ice",
    "snow": "WX:Snow/Ice",
    "rain": "WX:Rain",
    "low visibility": "WX:Low Visibility",
    "tornado or hurricane": "WX:Tornado/Hurricane",
    "wind shear or microburst": "WX:Wind Shear/Microburst",
    "severe turbulence": "WX:Severe Turbulence",
    "weather": "WX:Weather",
    "volume": "VOL:Volume",
    "compacted demand": "VOL:Compacted Demand",
    "multi-taxi": "VOL:Multi-taxi",
    "runway configuration change": "RWY:Configuration Change",
    "runway change": "RWY:Runway Change",
    "runway construction": "RWY:Construction",
    "runway maintenance": "RWY:Maintenance",
    "noise abatement": "RWY:Noise Abatement",
    "runway obstruction": "RWY:Obstruction",
    "taxiway construction": "TWY:Construction",
    "equipment outage": "EQ:Outage",
    "equipment": "EQ:Outage",
    "radar outage": "EQ:Radar Outage",
    "staffing": "STAFF:Staffing",
    "air show": "OTHER:Air Show",
    "aircraft emergency": "OTHER:Aircraft Emergency",
    "bird strike": "OTHER:Bird Strike",
    "military operations": "OTHER:Military Operations",
    "disabled aircraft": "OTHER:Disabled Aircraft",
    "vip movement": "VIP:VIP Movement",
    "other": "OTHER:Other",
})

# Sub-paths seen in the feed with no documented meaning.
UNCONFIRMED_SUBPATHS: FrozenSet[str] = frozenset({
    "ind releases",
    "converging rwy ops",
    "zdc stop",
})

_DEFAULT = object()


def _table(entries, default) -> Mapping:
    table = {key.lower(): phrase for key, phrase in entries.items()}
    table[_DEFAULT] = default
    return MappingProxyType(table)


# category -> lower-cased sub-path -> phrase; the _DEFAULT key holds the
# phrase for sub-paths not listed. None means "no causal clause".
DISPLAY_PHRASES: Mapping[ReasonCategory, Mapping] = MappingProxyType({
    ReasonCategory.WEATHER: _table({
        "Fog": "fog",
        "Low Ceilings": "low ceilings",
        "Thunderstorms": "thunderstorms",
        "Wind": "wind",
        "Snow/Ice": "snow/ice",
        "Snow": "snow/ice",
        "Ice": "snow/ice",
        "Wind Shear/Microburst": "wind shear/microburst",
        "Windshear/Microburst": "wind shear/microburst",
        "Microburst": "wind shear/microburst",
        "Tornado/Hurricane": "a tornado/hurricane",
        "Tornado": "a tornado/hurricane",
        "Hurricane": "a tornado/hurricane",
        "Rain": "rain",
        "Low Visibility": "low visibility",
        "Visibility": "low visibility",
        "Severe Turbulence": "severe turbulence",
        "Turbulence": "severe turbulence",
    }, "weather"),
    ReasonCategory.RUNWAY: _table({
        "Noise Abatement": "noise reduction measures",
        "Maintenance": "runway maintenance",
        "Construction": "runway construction",
        "Configuration Change": "a runway change",
        "Runway Change": "a runway change",
        "Disabled Aircraft": "a disabled aircraft",
        "Obstruction": "runway obstruction",
    }, None),
    ReasonCategory.TAXIWAY: _table({
        "Construction": "taxiway construction",
        "Maintenance": "taxiway maintenance",
    }, None),
    ReasonCategory.TRAFFIC_MANAGEMENT: _table({
        "MIT:VOL": "heavy traffic volume",
        "MINIT:VOL": "heavy traffic volume",
        "DSP:VOL": "heavy traffic volume",
        "STOP:VOL": "heavy traffic volume",
        "MIT:WX": "weather",
        "MINIT:WX": "weather",
        "DSP:WX": "weather",
        "STOP:WX": "weather",
        "MIT:STAFFING": "staffing constraints",
        "MINIT:STAFFING": "staffing constraints",
        "DSP:STAFFING": "staffing constraints",
        "STOP:STAFFING": "staffing constraints",
    }, "traffic management initiatives"),
    ReasonCategory.VOLUME: _table({
        "Compacted Demand": "traffic management initiatives",
        "Multi-taxi": "traffic management initiatives",
        "Volume": "high traffic volume",
    }, "high traffic volume"),
    ReasonCategory.STAFF: _table({}, "staffing constraints"),
    ReasonCategory.EQUIPMENT: _table({
        "Radar": "a radar equipment outage",
        "Radar Outage": "a radar equipment outage",
        "RADAR OTS": "a radar equipment outage",
        "ASR": "a radar equipment outage",
        "ASR OTS": "a radar equipment outage",
        "ARSR": "a radar equipment outage",
    }, "an equipment outage"),
    ReasonCategory.OTHER: _table({
        "Air Show": "an air show",
        "Aircraft Emergency": "an aircraft emergency",
        "Bird Strike": "a bird strike",
        "Military Operations": "military operations",
        "Disabled Aircraft": "a disabled aircraft",
        "Environmental Issue": "an environmental issue",
        "Animal on Runway": "an animal on the runway",
        "Search and Rescue": "search and rescue operations",
    }, None),
    ReasonCategory.VIP_MOVEMENT: _table({}, "VIP movement"),
})

RADAR_WEATHER_PHRASES = frozenset({"thunderstorms", "a tornado/hurricane", "rain"})


def normalize_raw(raw: str) -> str:
    """Apply the synonym table: exact match first, then lower-cased."""
    if raw in SYNONYMS:
        return SYNONYMS[raw]
    lowered = raw.strip().lower()
    if lowered in SYNONYMS:
        return SYNONYMS[lowered]
    return raw


@dataclass(frozen=True)
class ReasonCode:
    """A classified reason."""
    original: str
    raw: str
    zone_prefix: Optional[str]
    parts: List[str] = field(default_factory=list)
    category: Optional[ReasonCategory] = None

    @property
    def sub_path(self) -> str:
        """Path below the category, e.g. "MIT:VOL"."""
        return ":".join(self.parts[1:])

    @property
    def is_classified(self) -> bool:
        return self.display_phrase is not None

    @property
    def display_phrase(self) -> Optional[str]:
        """
        Human readable cause ("fog", "heavy traffic volume"), or None when
        the reason should not be mentioned.
        """
        if self.category is None:
            return None

        sub_path = self.sub_path.lower()
        if sub_path in UNCONFIRMED_SUBPATHS or (self.parts and self.parts[-1].lower() in UNCONFIRMED_SUBPATHS):
            return None

        table = DISPLAY_PHRASES[self.category]
        if sub_path in table:
            return table[sub_path]
        return table[_DEFAULT]

    @property
    def image_hints(self) -> FrozenSet[ImageHint]:
        if self.category is ReasonCategory.WEATHER and self.display_phrase in RADAR_WEATHER_PHRASES:
            return frozenset({ImageHint.WEATHER_RADAR})
        return frozenset()

    def __str__(self) -> str:
        return self.display_phrase or ""


def split_zone(raw: str):
    """
    Split an advisory zone prefix ("ZDC/VOL:Volume" -> ("ZDC", "VOL:Volume")).

    The prefix only counts when the "/" comes before the first ":".
    """
    slash = raw.find("/")
    colon = raw.find(":")
    if slash == -1 or (colon != -1 and slash > colon):
        return None, raw
    return raw[:slash].strip() or None, raw[slash + 1:]


def classify(raw: Optional[str]) -> ReasonCode:
    """
    Classify a raw reason string.

    Args:
        raw: Reason as it appears in the feed (None is treated as "")

    Returns:
        ReasonCode; unknown codes have category None
    """
    original = raw if isinstance(raw, str) else ""
    normalized = normalize_raw(original)
    zone_prefix, remainder = split_zone(normalized)
    parts = [part.strip() for part in remainder.split(":")]
    category = _CATEGORY_BY_CODE.get(parts[0].lower()) if parts else None

    return ReasonCode(
        original=original,
        raw=normalized,
        zone_prefix=zone_prefix,
        parts=parts,
        category=category,
    )
