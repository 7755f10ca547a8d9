# statusbot/reference/airports.py
"""
Airport reference data.

Status entries in the FAA feed identify airports by their FAA location
identifier (LID, e.g. "DEN", "JFK", "1O5"). The default directory is backed
by the `airportsdata` package, which carries name, coordinates and IANA
timezone for every US LID.
"""

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from ..geo.spherical import haversine_miles
from ..logging import get_logger

logger = get_logger(__name__)

# One degree of latitude is ~69 miles; used to prefilter nearest-airport scans.
MILES_PER_DEGREE = 69.0


@dataclass(frozen=True)
class Airport:
    """Airport as needed by post generation."""
    code: str  # FAA LID
    name: str
    latitude: float
    longitude: float
    country: str = "US"
    tz: Optional[str] = None  # IANA zone id

    @property
    def position(self):
        """[longitude, latitude]"""
        return (self.longitude, self.latitude)

    def timezone(self) -> Optional[str]:
        """IANA zone for the airport's location, if known."""
        return self.tz or None


class AirportDirectory(Protocol):
    """Lookup contract consumed by post generation."""

    def lookup_by_local_code(self, code: str, country_filter: str = "US") -> Optional[Airport]:
        ...

    def find_nearest(self, latitude: float, longitude: float, max_distance_miles: float) -> Optional[Airport]:
        ...


class InMemoryAirportDirectory:
    """Directory over an explicit list of airports."""

    def __init__(self, airports: Iterable[Airport]):
        self._airports, self._by_code = self._index(airports)

    @staticmethod
    def _index(airports: Iterable[Airport]) -> Tuple[List[Airport], Dict[str, Airport]]:
        listed = list(airports)
        by_code: Dict[str, Airport] = {}
        for airport in listed:
            by_code.setdefault(airport.code.upper(), airport)
        return listed, by_code

    def __len__(self) -> int:
        return len(self._airports)

    def lookup_by_local_code(self, code: str, country_filter: str = "US") -> Optional[Airport]:
        """
        Find an airport by FAA location identifier.

        Args:
            code: FAA LID (case-insensitive)
            country_filter: ISO country code the airport must be in, or "" for any

        Returns:
            Airport if found
        """
        if not code:
            return None
        airport = self._by_code.get(code.upper())
        if airport is None:
            return None
        if country_filter and airport.country != country_filter:
            return None
        return airport

    def find_nearest(self, latitude: float, longitude: float, max_distance_miles: float) -> Optional[Airport]:
        """
        Closest airport within max_distance_miles of a point.

        Returns:
            Airport, or None if nothing is close enough
        """
        point = (longitude, latitude)
        window = max_distance_miles / MILES_PER_DEGREE + 0.5

        best: Optional[Airport] = None
        best_distance = max_distance_miles
        for airport in self._airports:
            if abs(airport.latitude - latitude) > window:
                continue
            distance = haversine_miles(point, airport.position)
            if distance <= best_distance:
                best = airport
                best_distance = distance
        return best


class AirportsDataDirectory(InMemoryAirportDirectory):
    """
    Directory built from the `airportsdata` FAA LID table.

    Loaded lazily on first use; the table ships with the package, so no
    network access is needed. Safe to query from several threads.
    """

    def __init__(self):
        super().__init__([])
        self._loaded = False
        self._load_lock = threading.Lock()

    def _read_table(self) -> List[Airport]:
        import airportsdata

        return [
            Airport(
                code=lid,
                name=record.get("name") or lid,
                latitude=float(record["lat"]),
                longitude=float(record["lon"]),
                country=record.get("country") or "US",
                tz=record.get("tz") or None,
            )
            for lid, record in airportsdata.load("LID").items()
        ]

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._load_lock:
            if self._loaded:
                return
            airports, by_code = self._index(self._read_table())
            self._airports, self._by_code = airports, by_code
            self._loaded = True
        logger.info("airport_directory_loaded", count=len(airports))

    def lookup_by_local_code(self, code: str, country_filter: str = "US") -> Optional[Airport]:
        self._ensure_loaded()
        return super().lookup_by_local_code(code, country_filter)

    def find_nearest(self, latitude: float, longitude: float, max_distance_miles: float) -> Optional[Airport]:
        self._ensure_loaded()
        return super().find_nearest(latitude, longitude, max_distance_miles)
