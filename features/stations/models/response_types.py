from typing import List, Literal
from pydantic import BaseModel, Field

from features.common.utils.conversions import UnitConversions
from features.stations.models.station_types import StationRecord

class StationDisplay(BaseModel):
    """Station metadata rendered as text, with "unknown" for absent values."""
    name: str = Field(..., description="Station name")
    short_name: str = Field(..., description="Station name up to the first comma")
    units: str = Field(..., description="Height unit label")
    state: str = Field(..., description="Administrative region")
    distance: str = Field(..., description="Distance from the reference location")
    latitude: str = Field(..., description="Latitude in degrees")
    longitude: str = Field(..., description="Longitude in degrees")

    @classmethod
    def from_record(cls, record: StationRecord, distance_units: str) -> "StationDisplay":
        return cls(
            name=record.name,
            short_name=UnitConversions.short_location_name(record.name),
            units=record.units,
            state=record.state,
            distance=UnitConversions.format_optional(record.distance, distance_units),
            latitude=UnitConversions.format_optional(record.latitude, precision=4),
            longitude=UnitConversions.format_optional(record.longitude, precision=4)
        )

class GeoJSONFeature(BaseModel):
    """GeoJSON Feature"""
    type: Literal["Feature"] = "Feature"
    geometry: dict = Field(..., description="GeoJSON geometry")
    properties: dict = Field(..., description="Feature properties")

class GeoJSONResponse(BaseModel):
    """GeoJSON FeatureCollection response"""
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[GeoJSONFeature] = Field(..., description="List of GeoJSON features")

class FavoritesResponse(BaseModel):
    """Favorite stations for the active favorites list"""
    mode: Literal["standard", "legacy"] = Field(..., description="Active favorites list")
    stations: List[StationRecord] = Field(..., description="Favorite stations in order")

class HealthResponse(BaseModel):
    status: str
    time: str
    stations: int
