# statusbot/settings.py
"""
Application settings.
"""

import os
from dataclasses import dataclass

# Load .env file
from dotenv import load_dotenv
load_dotenv()

VERSION = "0.1.0"
HOMEPAGE = "https://mastodon.social/@AirportStatusBot"


@dataclass
class Settings:
    """Bot configuration."""

    # FAA feed
    faa_status_url: str = os.getenv(
        "FAA_STATUS_URL",
        "https://nasstatus.faa.gov/api/airport-status-information"
    )
    user_agent: str = os.getenv("USER_AGENT", f"AirportStatusBot/{VERSION} (+{HOMEPAGE})")

    # Polling
    refresh_interval_seconds: int = int(os.getenv("REFRESH_INTERVAL", "60"))
    ingestion_timeout_seconds: int = int(os.getenv("INGESTION_TIMEOUT", "30"))

    # Reference data and state
    natural_earth_dir: str = os.getenv("NATURAL_EARTH_DIR", "./cache/naturalearth")
    snapshot_path: str = os.getenv("SNAPSHOT_PATH", "./cache/previous.xml")

    # First run after start only records the feed unless enabled
    post_on_first_run: bool = os.getenv("POST_ON_FIRST_RUN", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "true").lower() == "true"

    # Status endpoint
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))


# Global settings instance
settings = Settings()
