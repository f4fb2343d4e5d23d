"""Response models for chuk-mcp-swissalti3d."""

from .responses import (
    DatasetResponse,
    ErrorResponse,
    MultiPointResponse,
    PointElevationResponse,
    PointInfo,
    StatusResponse,
    format_response,
)

__all__ = [
    "ErrorResponse",
    "PointElevationResponse",
    "PointInfo",
    "MultiPointResponse",
    "StatusResponse",
    "DatasetResponse",
    "format_response",
]
