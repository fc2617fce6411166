class GalleryError(Exception):
    """Base class for errors raised by orggallery."""


class NoHeadingError(GalleryError, LookupError):
    """Raised when a position has no enclosing heading."""


class PositionError(GalleryError, IndexError):
    """Raised when a position lies outside the document."""
