# Reference module - airport and region data consumed by post generation
from .airports import Airport, AirportDirectory, InMemoryAirportDirectory, AirportsDataDirectory
from .naturalearth import NaturalEarthDataManager, InMemoryRegionProvider

__all__ = [
    "Airport",
    "AirportDirectory",
    "InMemoryAirportDirectory",
    "AirportsDataDirectory",
    "NaturalEarthDataManager",
    "InMemoryRegionProvider",
]
