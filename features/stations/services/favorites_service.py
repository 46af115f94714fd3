import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from core.config import settings
from features.stations.exceptions.catalog_exceptions import (
    CatalogLoadError,
    FavoriteNotFoundError,
    StationNotFoundError
)
from features.stations.models.station_types import StationRecord
from features.stations.services.catalog_service import StationCatalog

logger = logging.getLogger(__name__)

FAVORITE_MODES = ("standard", "legacy")

class FavoritesService:
    """Keeps the user's favorite stations, one list per location mode."""

    def __init__(
        self,
        catalog: StationCatalog,
        favorites_file: Optional[Path] = None,
        legacy_mode: Optional[bool] = None,
        default_station: Optional[str] = None
    ):
        self.catalog = catalog
        self.favorites_file = Path(favorites_file or settings.favorites_file)
        self.legacy_mode = settings.legacy_mode if legacy_mode is None else legacy_mode
        self.default_station = default_station if default_station is not None else settings.default_station
        self._favorites: Dict[str, List[str]] = self._load()

    @property
    def mode(self) -> str:
        return "legacy" if self.legacy_mode else "standard"

    def _load(self) -> Dict[str, List[str]]:
        """Load favorites from disk; a missing file means no favorites."""
        favorites = {mode: [] for mode in FAVORITE_MODES}
        if not self.favorites_file.exists():
            return favorites

        try:
            with open(self.favorites_file) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(f"Error loading favorites from {self.favorites_file}: {str(e)}") from e

        if not isinstance(data, dict):
            raise CatalogLoadError(f"Favorites in {self.favorites_file} must be a JSON object")

        for mode in FAVORITE_MODES:
            favorites[mode] = [name for name in data.get(mode, []) if isinstance(name, str)]
        return favorites

    def _save(self) -> None:
        """Write favorites to a sibling temp file, then swap it into place."""
        self.favorites_file.parent.mkdir(parents=True, exist_ok=True)
        tmp_file = self.favorites_file.with_name(self.favorites_file.name + ".tmp")
        try:
            with open(tmp_file, 'w') as f:
                json.dump(self._favorites, f, indent=2)
            tmp_file.replace(self.favorites_file)
        except Exception as e:
            logger.error(f"Error saving favorites to {self.favorites_file}: {str(e)}")
            tmp_file.unlink(missing_ok=True)
            raise

    def favorite_names(self) -> List[str]:
        return list(self._favorites[self.mode])

    def list_favorites(self) -> List[StationRecord]:
        """Favorite stations in the order they were added.

        Falls back to the configured default station when the active list is
        empty. Favorites no longer present in the catalog are skipped.
        """
        names = self._favorites[self.mode]
        if not names and self.default_station:
            names = [self.default_station]

        stations = []
        for name in names:
            try:
                stations.append(self.catalog.get_station(name))
            except StationNotFoundError:
                logger.warning(f"Favorite station {name} is not in the catalog")
        return stations

    def add_favorite(self, name: str) -> List[StationRecord]:
        self.catalog.get_station(name)
        names = self._favorites[self.mode]
        if name not in names:
            names.append(name)
            self._save()
            logger.info(f"Added {name} to {self.mode} favorites")
        return self.list_favorites()

    def remove_favorite(self, name: str) -> List[StationRecord]:
        names = self._favorites[self.mode]
        if name not in names:
            raise FavoriteNotFoundError(name)
        names.remove(name)
        self._save()
        logger.info(f"Removed {name} from {self.mode} favorites")
        return self.list_favorites()
