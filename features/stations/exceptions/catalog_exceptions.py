from typing import Any, List

class IncompleteStationError(Exception):
    """Raised when a station record is built before its name was supplied."""
    pass

class CatalogError(Exception):
    """Base exception for station catalog errors."""
    pass

class CatalogLoadError(CatalogError):
    """Raised when the station list cannot be read or decoded."""
    pass

class InvalidStationEntryError(CatalogError):
    """Raised when a raw station entry fails catalog validation."""

    def __init__(self, entry: Any, problems: List[str]):
        self.entry = entry
        self.problems = problems
        super().__init__(f"Invalid station entry {entry!r}: {'; '.join(problems)}")

class ReferencePointError(CatalogError):
    """Raised when a reference location for a distance query is out of range."""
    pass

class StationNotFoundError(CatalogError):
    """Raised when no station matches the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Station {name} not found")

class FavoriteNotFoundError(CatalogError):
    """Raised when removing a station that is not a favorite."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Station {name} is not a favorite")
