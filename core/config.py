from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List, Optional

class Settings(BaseSettings):
    """Application settings."""

    # Station catalog
    stations_file: str = "data/tide_stations.json"
    allowed_units: List[str] = ["feet", "meters"]
    distance_units: str = "miles"  # "miles" or "kilometers"
    nearest_limit: int = 10

    # Favorites
    favorites_file: str = "data/favorites.json"
    default_station: Optional[str] = None
    legacy_mode: bool = False

    # Cache
    cache_enabled: bool = True
    cache_prefix: str = "tide_stations"
    cache_ttl: Dict[str, Optional[int]] = {
        "station_catalog": None,    # No expiration for static station lists
        "stations_geojson": None,
    }

    # Logging
    log_level: str = "INFO"
    log_utc_offset_hours: int = 0
    log_timezone_label: str = "UTC"

    def get_cache_ttl(self, namespace: str) -> Optional[int]:
        """Get cache TTL for a namespace. None means the entry never expires."""
        return self.cache_ttl.get(namespace)

    model_config = SettingsConfigDict(
        env_prefix="tides_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
