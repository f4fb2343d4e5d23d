#!/usr/bin/env python3
"""
Async swissalti3d MCP Server using chuk-mcp-server

Point elevation queries over the swisstopo swissALTI3D dataset. Tiles are
fetched on demand and cached under the configured cache directory.
"""

import logging
import os

from chuk_mcp_server import ChukMCPServer

from .constants import DEFAULT_CACHE_DIR, DEFAULT_TIMEOUT_S, EnvVar, ServerConfig
from .core.provider import Swissalti3dElevationProvider
from .tools.discovery import register_discovery_tools
from .tools.elevation import register_elevation_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def build_provider() -> Swissalti3dElevationProvider:
    """Create the elevation provider from environment configuration."""
    cache_dir = os.environ.get(EnvVar.CACHE_DIR, DEFAULT_CACHE_DIR)
    timeout = float(os.environ.get(EnvVar.TIMEOUT_S, DEFAULT_TIMEOUT_S))
    auto_remove = _env_flag(EnvVar.AUTO_REMOVE)

    logger.info(f"swissalti3d cache: {cache_dir} (auto remove: {auto_remove})")
    return Swissalti3dElevationProvider(
        cache_dir=cache_dir,
        timeout=timeout,
        auto_remove_temporary=auto_remove,
    )


# Create the MCP server instance
mcp = ChukMCPServer(ServerConfig.NAME)

# Create elevation provider instance
provider = build_provider()

# Register all tool modules
register_discovery_tools(mcp, provider)
register_elevation_tools(mcp, provider)

# Run the server
if __name__ == "__main__":
    logger.info("Starting swissalti3d MCP Server...")
    mcp.run(stdio=True)
