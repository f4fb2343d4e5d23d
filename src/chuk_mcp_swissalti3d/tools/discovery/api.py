"""
Discovery tools: dataset description and cache status.

These tools require no network I/O.
"""

import logging

from ...constants import DATASET_INFO, ServerConfig, SuccessMessages
from ...models.responses import (
    DatasetResponse,
    ErrorResponse,
    StatusResponse,
    format_response,
)

logger = logging.getLogger(__name__)


def register_discovery_tools(mcp, provider):
    """Register discovery tools with the MCP server."""

    @mcp.tool()
    async def swissalti3d_status(output_mode: str = "json") -> str:
        """Get server status including cache directory, index and in-memory tile counts.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Server status information
        """
        try:
            status = provider.cache_status()
            response = StatusResponse(
                server=ServerConfig.NAME,
                version=ServerConfig.VERSION,
                dataset=provider.describe(),
                message=SuccessMessages.STATUS.format(
                    ServerConfig.VERSION, status["tiles_indexed"], status["rasters_cached"]
                ),
                **status,
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"swissalti3d_status failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def swissalti3d_describe(output_mode: str = "json") -> str:
        """Describe the swissALTI3D dataset: resolution, LV95 coverage bounds, tiling.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Dataset metadata
        """
        try:
            data = dict(DATASET_INFO)
            data["interpolation"] = provider.can_interpolate()
            response = DatasetResponse(
                **data,
                message=SuccessMessages.DESCRIBE.format(
                    data["name"], data["resolution_m"], data["coverage"]
                ),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"swissalti3d_describe failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)
