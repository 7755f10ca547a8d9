# statusbot/reference/naturalearth.py
"""
Natural Earth polygon sets (US states, countries).

Source: https://github.com/nvkelso/natural-earth-vector (GeoJSON exports)

Files are cached as <data_dir>/<dataset>.geojson and refreshed at most once
a day by update_cache().
"""

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional

from ..ingestion.http import HttpClient, HttpClientError
from ..logging import get_logger

logger = get_logger(__name__)

NATURAL_EARTH_BASE_URL = "https://raw.githubusercontent.com/nvkelso/natural-earth-vector/master/geojson"

DATASETS = (
    "ne_110m_admin_1_states_provinces",
    "ne_110m_admin_0_countries",
)

CACHE_MAX_AGE_SECONDS = 24 * 60 * 60
LAST_UPDATED_FILE = "lastUpdatedDate.txt"


class NaturalEarthDataManager:
    """
    Provides GeoJSON FeatureCollections by dataset name.

    Usage:
        manager = NaturalEarthDataManager("./var/naturalearth")
        states = manager.get_polygon_set("ne_110m_admin_1_states_provinces")
    """

    def __init__(self, data_dir: str, user_agent: Optional[str] = None, timeout: float = 30.0):
        self.data_dir = Path(data_dir)
        headers = {"User-Agent": user_agent} if user_agent else None
        self.client = HttpClient(base_url=NATURAL_EARTH_BASE_URL, timeout=timeout, headers=headers)
        self._collections: Dict[str, Dict[str, Any]] = {}

    def _path(self, name: str) -> Path:
        return self.data_dir / f"{name}.geojson"

    def _last_updated(self) -> Optional[float]:
        marker = self.data_dir / LAST_UPDATED_FILE
        if not marker.exists():
            return None
        try:
            return float(marker.read_text().strip())
        except ValueError:
            return None

    def _cache_is_fresh(self) -> bool:
        if not all(self._path(name).exists() for name in DATASETS):
            return False
        last_updated = self._last_updated()
        return last_updated is not None and last_updated >= time.time() - CACHE_MAX_AGE_SECONDS

    def update_cache(self, force: bool = False) -> bool:
        """
        Download every dataset if the cache is missing or older than a day.

        Failures are logged and leave the existing cache in place.

        Returns:
            True if the cache was refreshed
        """
        if not force and self._cache_is_fresh():
            return False

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            for name in DATASETS:
                text = self.client.get_text(f"/{name}.geojson")
                json.loads(text)
                self._path(name).write_text(text)
            (self.data_dir / LAST_UPDATED_FILE).write_text(str(time.time()))
        except (HttpClientError, ValueError, OSError) as e:
            logger.error("natural_earth_update_failed", error=str(e))
            return False

        self._collections.clear()
        logger.info("natural_earth_cache_updated", datasets=list(DATASETS))
        return True

    def get_polygon_set(self, name: str) -> Optional[Dict[str, Any]]:
        """
        FeatureCollection for a dataset.

        Args:
            name: Dataset name, e.g. "ne_110m_admin_1_states_provinces"

        Returns:
            Parsed GeoJSON, or None if the dataset is unknown or not cached
        """
        if name not in DATASETS:
            return None
        if name in self._collections:
            return self._collections[name]

        path = self._path(name)
        if not path.exists():
            logger.warning("natural_earth_dataset_missing", dataset=name, path=str(path))
            return None

        with path.open(encoding="utf-8") as f:
            collection = json.load(f)
        self._collections[name] = collection
        return collection


class InMemoryRegionProvider:
    """Region provider over pre-built FeatureCollections."""

    def __init__(self, collections: Dict[str, Dict[str, Any]]):
        self._collections = dict(collections)

    def get_polygon_set(self, name: str) -> Optional[Dict[str, Any]]:
        return self._collections.get(name)
