import math

EARTH_RADIUS_KM = 6371
EARTH_RADIUS_MILES = 3958.8

class GeoUtils:
    @staticmethod
    def to_radians(degrees: float) -> float:
        """Convert degrees to radians."""
        return degrees * math.pi / 180

    @staticmethod
    def is_valid_latitude(lat: float) -> bool:
        return -90 <= lat <= 90

    @staticmethod
    def is_valid_longitude(lon: float) -> bool:
        return -180 <= lon <= 180

    @staticmethod
    def calculate_distance(
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        units: str = "kilometers"
    ) -> float:
        """
        Calculate the great circle distance between two points.

        Args:
            lat1: Latitude of first point
            lon1: Longitude of first point
            lat2: Latitude of second point
            lon2: Longitude of second point
            units: "kilometers" or "miles"

        Returns:
            Distance in the requested units
        """
        if units == "miles":
            R = EARTH_RADIUS_MILES
        elif units == "kilometers":
            R = EARTH_RADIUS_KM
        else:
            raise ValueError(f"Unsupported distance units: {units}")

        d_lat = GeoUtils.to_radians(lat2 - lat1)
        d_lon = GeoUtils.to_radians(lon2 - lon1)

        a = (math.sin(d_lat / 2) * math.sin(d_lat / 2) +
             math.cos(GeoUtils.to_radians(lat1)) *
             math.cos(GeoUtils.to_radians(lat2)) *
             math.sin(d_lon / 2) * math.sin(d_lon / 2))
        # Rounding can push a past 1 for antipodal points
        a = min(1.0, max(0.0, a))

        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return R * c
