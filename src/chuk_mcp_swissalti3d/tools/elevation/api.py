"""
Elevation tools: single and multi-point swissalti3d queries.

These tools may perform network I/O on a cold cache (tile listing and
tile downloads); warm queries are served from disk and memory.
"""

import logging

from ...constants import MAX_POINTS, ErrorMessages, LookupStatus, SuccessMessages
from ...models.responses import (
    ErrorResponse,
    MultiPointResponse,
    PointElevationResponse,
    PointInfo,
    format_response,
)

logger = logging.getLogger(__name__)


def register_elevation_tools(mcp, provider):
    """Register elevation tools with the MCP server."""

    @mcp.tool()
    async def swissalti3d_elevation(lat: float, lon: float, output_mode: str = "json") -> str:
        """Get ground elevation at a single WGS84 point in Switzerland.

        Points outside the swissALTI3D coverage, or whose tile cannot be
        fetched, return 0 with a status explaining why.

        Args:
            lat: Latitude (WGS84)
            lon: Longitude (WGS84)
            output_mode: "json" or "text"

        Returns:
            Elevation in metres with LV95 coordinates and lookup status
        """
        try:
            result = await provider.fetch_point(lat=lat, lon=lon)

            if result.status == LookupStatus.OK:
                message = SuccessMessages.POINT_ELEVATION.format(result.elevation_m)
            else:
                message = SuccessMessages.POINT_NO_DATA.format(result.status)

            response = PointElevationResponse(
                lat=lat,
                lon=lon,
                x=result.x,
                y=result.y,
                tile_key=result.tile_key,
                elevation_m=result.elevation_m,
                status=result.status,
                message=message,
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"swissalti3d_elevation failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def swissalti3d_elevations(points: list[list[float]], output_mode: str = "json") -> str:
        """Get ground elevation at several WGS84 points.

        Args:
            points: List of [lat, lon] pairs
            output_mode: "json" or "text"

        Returns:
            Per-point elevations and statuses with the overall elevation range
        """
        try:
            if not points:
                raise ValueError(ErrorMessages.EMPTY_POINTS)
            if len(points) > MAX_POINTS:
                raise ValueError(ErrorMessages.TOO_MANY_POINTS.format(len(points), MAX_POINTS))

            result = await provider.fetch_points(points)

            infos = [
                PointInfo(lat=p[0], lon=p[1], elevation_m=elev, status=status)
                for p, elev, status in zip(points, result.elevations, result.statuses)
            ]
            with_data = sum(1 for s in result.statuses if s == LookupStatus.OK)

            response = MultiPointResponse(
                point_count=len(points),
                points=infos,
                elevation_range=result.elevation_range,
                message=SuccessMessages.POINTS_ELEVATION.format(len(points), with_data),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"swissalti3d_elevations failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)
