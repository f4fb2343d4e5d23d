"""
Exceptions raised by the swissalti3d elevation pipeline.

ReprojectionError escapes to callers only at provider construction; a
point without a finite projection is mapped to outside coverage. The
others are raised inside the tile pipeline and mapped to a lookup status
at the query boundary.
"""


class ElevationError(Exception):
    """Base class for elevation pipeline failures."""


class ReprojectionError(ElevationError):
    """The geographic or dataset coordinate system could not be resolved."""


class IndexUnavailableError(ElevationError):
    """The remote tile listing could not be fetched or parsed."""


class DownloadError(ElevationError):
    """A remote file could not be fetched or written to the cache."""


class DecodeError(ElevationError):
    """A cached tile file is not a readable raster."""
