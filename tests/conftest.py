"""Shared fixtures for the tide station tests."""
import json
import os

# Response caching is decided when routes are imported
os.environ.setdefault("TIDES_CACHE_ENABLED", "false")

import pytest

SAMPLE_STATIONS = [
    {"name": "Boston", "units": "feet", "state": "MA", "distance": 0.0,
     "latitude": 42.3601, "longitude": -71.0589},
    {"name": "La Jolla, California", "units": "feet", "state": "CA", "distance": None,
     "latitude": 32.8667, "longitude": -117.2567},
    {"name": "Halifax, Nova Scotia", "units": "meters", "state": "NS", "distance": None,
     "latitude": 44.6667, "longitude": -63.5833},
    {"name": "Seattle, Washington", "units": "feet", "state": "WA", "distance": None,
     "latitude": 47.6026, "longitude": -122.3393},
    {"name": "Reference Station", "units": "meters", "state": "", "distance": None,
     "latitude": None, "longitude": None},
]


@pytest.fixture
def stations_file(tmp_path):
    path = tmp_path / "tide_stations.json"
    path.write_text(json.dumps(SAMPLE_STATIONS))
    return path


@pytest.fixture
def catalog(stations_file):
    from features.stations.services.catalog_service import StationCatalog
    return StationCatalog(
        stations_file=stations_file,
        allowed_units=["feet", "meters"],
        distance_units="miles",
    )


@pytest.fixture
def favorites(catalog, tmp_path):
    from features.stations.services.favorites_service import FavoritesService
    return FavoritesService(
        catalog=catalog,
        favorites_file=tmp_path / "favorites.json",
        legacy_mode=False,
        default_station="",
    )


@pytest.fixture
def client(catalog, favorites):
    from fastapi.testclient import TestClient
    from main import app

    app.state.station_catalog = catalog
    app.state.favorites_service = favorites
    with TestClient(app) as test_client:
        yield test_client
