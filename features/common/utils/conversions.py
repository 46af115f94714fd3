from typing import Optional

UNKNOWN = "unknown"

UNIT_ABBREVIATIONS = {
    "feet": "ft",
    "foot": "ft",
    "ft": "ft",
    "meters": "m",
    "metres": "m",
    "meter": "m",
    "m": "m",
}

class UnitConversions:
    """Centralized utility for unit conversions and display formatting."""

    @staticmethod
    def meters_to_feet(meters: Optional[float]) -> Optional[float]:
        """Convert meters to feet."""
        if meters is None:
            return None
        return round(meters * 3.28084, 2)

    @staticmethod
    def feet_to_meters(feet: Optional[float]) -> Optional[float]:
        """Convert feet to meters."""
        if feet is None:
            return None
        return round(feet / 3.28084, 2)

    @staticmethod
    def unit_abbreviation(units: str) -> str:
        """Short label for a height unit; unrecognised labels pass through."""
        return UNIT_ABBREVIATIONS.get(units.strip().lower(), units.strip())

    @staticmethod
    def format_optional(value: Optional[float], suffix: str = "", precision: int = 2) -> str:
        """Render a numeric value, or "unknown" when it was never supplied."""
        if value is None:
            return UNKNOWN
        text = f"{value:.{precision}f}"
        return f"{text} {suffix}" if suffix else text

    @staticmethod
    def format_height(value: Optional[float], units: str) -> str:
        """Render a tide height with its unit abbreviation, e.g. "4.20 ft"."""
        return UnitConversions.format_optional(value, UnitConversions.unit_abbreviation(units))

    @staticmethod
    def short_location_name(name: str) -> str:
        """Station name up to the first comma, e.g. "La Jolla" from "La Jolla, California"."""
        return name.split(",", 1)[0].strip()
