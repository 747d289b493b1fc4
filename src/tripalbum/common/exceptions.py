class TripAlbumError(Exception):
    """Base class for errors raised by the album builder."""


class InvalidOrderError(TripAlbumError, ValueError):
    """Photos were expected in ascending timestamp order."""

    def __init__(self, index: int, previous: float, current: float):
        self.index = index
        self.previous = previous
        self.current = current
        super().__init__(
            f"Photo at index {index} has timestamp {current} earlier than its predecessor ({previous})"
        )


class EmbeddingDimensionError(TripAlbumError, ValueError):
    """Two vectors cannot be compared (empty or different lengths)."""


class PlaceSearchError(TripAlbumError):
    """Transport failure reported by a place search collaborator."""
