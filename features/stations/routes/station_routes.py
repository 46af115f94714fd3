from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
import logging

from core.cache import cached
from features.stations.exceptions.catalog_exceptions import (
    CatalogLoadError,
    ReferencePointError,
    StationNotFoundError
)
from features.stations.models.response_types import (
    GeoJSONFeature,
    GeoJSONResponse,
    StationDisplay
)
from features.stations.models.station_types import StationRecord
from features.stations.services.catalog_service import StationCatalog

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/stations",
    tags=["Stations"]
)

def get_catalog(request: Request) -> StationCatalog:
    """Dependency to get the StationCatalog instance."""
    return request.app.state.station_catalog

def _load_failed(e: CatalogLoadError) -> HTTPException:
    logger.error(f"Error loading tide stations: {str(e)}")
    return HTTPException(status_code=500, detail=str(e))

@router.get(
    "",
    response_model=List[StationRecord],
    summary="Get all tide stations",
    description="Returns every catalog station, optionally filtered by name or state"
)
@cached(namespace="station_catalog")
async def get_stations(
    q: Optional[str] = Query(None, description="Case-insensitive name or state filter"),
    catalog: StationCatalog = Depends(get_catalog)
) -> List[StationRecord]:
    """Get all tide stations."""
    try:
        return catalog.search(q) if q else catalog.stations()
    except CatalogLoadError as e:
        raise _load_failed(e)

@router.get(
    "/geojson",
    response_model=GeoJSONResponse,
    summary="Get stations in GeoJSON format",
    description="Returns tide stations with known coordinates in GeoJSON format for mapping"
)
@cached(namespace="stations_geojson")
async def get_stations_geojson(
    catalog: StationCatalog = Depends(get_catalog)
) -> GeoJSONResponse:
    """Get stations in GeoJSON format."""
    try:
        stations = catalog.stations()
    except CatalogLoadError as e:
        raise _load_failed(e)

    return GeoJSONResponse(
        features=[
            GeoJSONFeature(
                geometry={
                    "type": "Point",
                    "coordinates": [station.longitude, station.latitude]
                },
                properties={
                    "name": station.name,
                    "state": station.state,
                    "units": station.units
                }
            )
            for station in stations
            if station.coordinates is not None
        ]
    )

@router.get(
    "/nearest",
    response_model=List[StationRecord],
    summary="Get stations nearest a location",
    description="Returns stations ordered by distance from the given point, with distance filled in"
)
async def get_nearest_stations(
    lat: float = Query(..., description="Reference latitude"),
    lon: float = Query(..., description="Reference longitude"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of stations"),
    catalog: StationCatalog = Depends(get_catalog)
) -> List[StationRecord]:
    """Get stations nearest a reference point."""
    try:
        return catalog.nearest(lat, lon, limit)
    except ReferencePointError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except CatalogLoadError as e:
        raise _load_failed(e)

# Display is declared before the plain lookup so "{name}/display" is not read as a name
@router.get(
    "/{name:path}/display",
    response_model=StationDisplay,
    summary="Get a tide station formatted for display",
    description="Returns station metadata as text, showing 'unknown' for values the data source did not supply"
)
async def get_station_display(
    name: str,
    catalog: StationCatalog = Depends(get_catalog)
) -> StationDisplay:
    """Get a station rendered for display."""
    try:
        station = catalog.get_station(name)
    except StationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CatalogLoadError as e:
        raise _load_failed(e)
    return StationDisplay.from_record(station, catalog.distance_units)

@router.get(
    "/{name:path}",
    response_model=StationRecord,
    summary="Get a tide station",
    description="Returns the metadata for a single station by exact name. Names may contain '/'; "
                "stations named 'geojson' or 'nearest' are only reachable through the ?q= search"
)
async def get_station(
    name: str,
    catalog: StationCatalog = Depends(get_catalog)
) -> StationRecord:
    """Get a station by name."""
    try:
        return catalog.get_station(name)
    except StationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CatalogLoadError as e:
        raise _load_failed(e)
