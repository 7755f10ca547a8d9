# tests/conftest.py
"""
Pytest configuration and fixtures.

Tests run without network access: airports and Natural Earth regions
come from small in-memory fixtures, and every test that renders time
uses a fixed "now" (2024-08-26 18:00 UTC, a Monday).
"""

from datetime import datetime, timezone

import pytest

from statusbot.reference.airports import Airport, InMemoryAirportDirectory
from statusbot.reference.naturalearth import InMemoryRegionProvider
from statusbot.geo.regions import STATES_DATASET
from statusbot.status.posts import PostGenerator

FIXED_NOW = datetime(2024, 8, 26, 18, 0, tzinfo=timezone.utc)


def box_feature(name, west, south, east, north, country="US"):
    """State feature whose geometry is a lon/lat rectangle."""
    ring = [[west, south], [east, south], [east, north], [west, north], [west, south]]
    return {
        "type": "Feature",
        "properties": {"name": name, "iso_a2": country},
        "geometry": {"type": "Polygon", "coordinates": [ring]},
    }


STATES = {
    "type": "FeatureCollection",
    "features": [
        box_feature("Florida", -87.6, 24.5, -80.0, 31.0),
        box_feature("Colorado", -109.0, 37.0, -102.0, 41.0),
        box_feature("Kansas", -102.0, 37.0, -94.6, 40.0),
        box_feature("Maine", -71.0, 43.0, -67.0, 47.5),
        box_feature("Alaska", -170.0, 55.0, -140.0, 71.0),
        box_feature("Hawaii", -160.0, 18.9, -154.8, 22.2),
        box_feature("Ontario", -95.0, 42.0, -74.0, 56.0, country="CA"),
    ],
}

TEST_AIRPORTS = [
    Airport(
        code="AAA",
        name="Test Airport A",
        latitude=39.86169814,
        longitude=-104.6728,
        tz="America/Denver",
    ),
    Airport(
        code="BBB",
        name="Test Airport B",
        latitude=33.0,
        longitude=-97.0,
        tz=None,
    ),
]


@pytest.fixture
def now():
    """Fixed reference time."""
    return FIXED_NOW


@pytest.fixture
def airports():
    return InMemoryAirportDirectory(TEST_AIRPORTS)


@pytest.fixture
def regions():
    return InMemoryRegionProvider({STATES_DATASET: STATES})


@pytest.fixture
def generator(airports, regions, now):
    """PostGenerator over the in-memory fixtures."""
    return PostGenerator(airports, regions, now)


def ground_stop(end_time=None, reason="thunderstorms", code="AAA"):
    details = {"ARPT": code, "Reason": reason}
    if end_time:
        details["End_Time"] = end_time
    return {"Name": "Ground Stop Programs", "Ground_Stop_List": {"Program": details}}


def ground_delay(avg=None, maximum=None, reason="low ceilings", code="AAA"):
    details = {"ARPT": code, "Reason": reason}
    if avg:
        details["Avg"] = avg
    if maximum:
        details["Max"] = maximum
    return {"Name": "Ground Delay Programs", "Ground_Delay_List": {"Ground_Delay": details}}


def arrival_departure(direction="Departure", trend="Increasing", minimum="46 minutes", maximum="1 hour",
                      reason="TM Initiatives:MIT:VOL", code="AAA"):
    return {
        "Name": "General Arrival/Departure Delay Info",
        "Arrival_Departure_Delay_List": {
            "Delay": {
                "ARPT": code,
                "Reason": reason,
                "Arrival_Departure": {
                    "@_Type": direction,
                    "Trend": trend,
                    "Min": minimum,
                    "Max": maximum,
                },
            }
        },
    }


def closure(reason="!AAA 09/001 AAA AD AP CLSD 2109010000-2109012359", start=None, reopen=None, code="AAA"):
    details = {"ARPT": code, "Reason": reason}
    if start:
        details["Start"] = start
    if reopen:
        details["Reopen"] = reopen
    return {"Name": "Airport Closures", "Airport_Closure_List": {"Airport": details}}


def airspace_flow(ctl="FCAJX5", reason="thunderstorms", avg="22 minutes", floor=180, ceiling=600,
                  points=None, circle=None):
    details = {
        "CTL_Element": ctl,
        "Reason": reason,
        "Avg": avg,
        "Floor": floor,
        "Ceiling": ceiling,
    }
    if points is not None:
        details["Line"] = {"Point": [{"@_Lat": str(lat), "@_Long": str(lon)} for lat, lon in points]}
    if circle is not None:
        (lat, lon), radius = circle
        details["Circle"] = {"@_Radius": str(radius), "Center": {"@_Lat": str(lat), "@_Long": str(lon)}}
    if ceiling is None:
        del details["Ceiling"]
    return {"Name": "Airspace Flow Programs", "Airspace_Flow_List": {"Airspace_Flow": details}}


FLORIDA_LINE = [(31.57, -77.45), (30.55, -79.68), (29.97, -82.02), (28.52, -83.9), (25.47, -87.27)]
ATLANTIC_LINE = [(52.12, -64.77), (42.18, -61.57), (43.57, -55.77)]


def feed_xml(*delay_types_xml):
    """Wrap Delay_type fragments in a feed document."""
    body = "".join(delay_types_xml)
    return (
        "<AIRPORT_STATUS_INFORMATION>"
        "<Update_Time>Mon Aug 26 18:00:00 2024 GMT</Update_Time>"
        f"{body}"
        "</AIRPORT_STATUS_INFORMATION>"
    )


def ground_stop_xml(code="AAA", reason="thunderstorms", end_time="11:15 pm EDT"):
    return (
        "<Delay_type><Name>Ground Stop Programs</Name><Ground_Stop_List>"
        f"<Program><ARPT>{code}</ARPT><Reason>{reason}</Reason><End_Time>{end_time}</End_Time></Program>"
        "</Ground_Stop_List></Delay_type>"
    )


def ground_delay_xml(code="AAA", reason="low ceilings", avg="55 minutes", maximum="3 hours"):
    return (
        "<Delay_type><Name>Ground Delay Programs</Name><Ground_Delay_List>"
        f"<Ground_Delay><ARPT>{code}</ARPT><Reason>{reason}</Reason><Avg>{avg}</Avg><Max>{maximum}</Max></Ground_Delay>"
        "</Ground_Delay_List></Delay_type>"
    )


def closure_xml(code="AAA", reason="!AAA 09/001 AAA AD AP CLSD 2109010000-2109012359"):
    return (
        "<Delay_type><Name>Airport Closures</Name><Airport_Closure_List>"
        f"<Airport><ARPT>{code}</ARPT><Reason>{reason}</Reason>"
        "<Start>Dec 13 at 18:00 UTC.</Start><Reopen>Dec 13 at 23:59 UTC.</Reopen></Airport>"
        "</Airport_Closure_List></Delay_type>"
    )
