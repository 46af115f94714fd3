from fastapi import APIRouter, Depends, HTTPException, Request

from features.stations.exceptions.catalog_exceptions import (
    FavoriteNotFoundError,
    StationNotFoundError
)
from features.stations.models.response_types import FavoritesResponse
from features.stations.services.favorites_service import FavoritesService

router = APIRouter(
    prefix="/favorites",
    tags=["Favorites"]
)

def get_service(request: Request) -> FavoritesService:
    """Dependency to get the FavoritesService instance."""
    return request.app.state.favorites_service

@router.get(
    "",
    response_model=FavoritesResponse,
    summary="Get favorite stations",
    description="Returns the favorite stations for the active location mode"
)
async def get_favorites(
    service: FavoritesService = Depends(get_service)
) -> FavoritesResponse:
    """Get favorite stations."""
    return FavoritesResponse(mode=service.mode, stations=service.list_favorites())

@router.post(
    "/{name:path}",
    response_model=FavoritesResponse,
    summary="Add a favorite station"
)
async def add_favorite(
    name: str,
    service: FavoritesService = Depends(get_service)
) -> FavoritesResponse:
    """Add a station to the active favorites list."""
    try:
        stations = service.add_favorite(name)
    except StationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return FavoritesResponse(mode=service.mode, stations=stations)

@router.delete(
    "/{name:path}",
    response_model=FavoritesResponse,
    summary="Remove a favorite station"
)
async def remove_favorite(
    name: str,
    service: FavoritesService = Depends(get_service)
) -> FavoritesResponse:
    """Remove a station from the active favorites list."""
    try:
        stations = service.remove_favorite(name)
    except FavoriteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return FavoritesResponse(mode=service.mode, stations=stations)
