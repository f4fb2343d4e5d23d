"""
Response models for chuk-mcp-swissalti3d tools.

All tool responses are Pydantic models for type safety and consistent API.
"""

from pydantic import BaseModel, ConfigDict, Field


def format_response(model: BaseModel, output_mode: str = "json") -> str:
    """Format a response model as JSON or human-readable text.

    Args:
        model: Pydantic response model instance
        output_mode: "json" (default) or "text"

    Returns:
        Formatted string
    """
    if output_mode == "text" and hasattr(model, "to_text"):
        return str(model.to_text())
    return str(model.model_dump_json())


class ErrorResponse(BaseModel):
    """Error response model for tool failures."""

    model_config = ConfigDict(extra="forbid")

    error: str = Field(..., description="Error message describing what went wrong")

    def to_text(self) -> str:
        return f"Error: {self.error}"


class PointElevationResponse(BaseModel):
    """Response model for single-point elevation query."""

    model_config = ConfigDict(extra="forbid")

    lat: float = Field(..., description="Latitude of the query point (WGS84)")
    lon: float = Field(..., description="Longitude of the query point (WGS84)")
    x: int = Field(..., description="LV95 easting (EPSG:2056)")
    y: int = Field(..., description="LV95 northing (EPSG:2056)")
    tile_key: str | None = Field(None, description="Tile containing the point")
    elevation_m: float = Field(..., description="Elevation in metres (0 when unavailable)")
    status: str = Field(..., description="Lookup status (ok, outside_coverage, no_tile, ...)")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"Elevation at ({self.lat:.6f}, {self.lon:.6f}): {self.elevation_m:.1f}m",
            f"LV95: ({self.x}, {self.y})",
            f"Status: {self.status}",
        ]
        if self.tile_key:
            lines.append(f"Tile: {self.tile_key}")
        return "\n".join(lines)


class PointInfo(BaseModel):
    """Elevation data for a single point in a multi-point query."""

    model_config = ConfigDict(extra="forbid")

    lat: float = Field(..., description="Latitude")
    lon: float = Field(..., description="Longitude")
    elevation_m: float = Field(..., description="Elevation in metres (0 when unavailable)")
    status: str = Field(..., description="Lookup status")


class MultiPointResponse(BaseModel):
    """Response model for multi-point elevation query."""

    model_config = ConfigDict(extra="forbid")

    point_count: int = Field(..., description="Number of points queried")
    points: list[PointInfo] = Field(..., description="Per-point elevations")
    elevation_range: list[float] = Field(..., description="[min, max] over points with data")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"Elevations for {self.point_count} points",
            f"Range: {self.elevation_range[0]:.1f}m - {self.elevation_range[1]:.1f}m",
            "",
        ]
        for p in self.points:
            suffix = "" if p.status == "ok" else f" [{p.status}]"
            lines.append(f"  ({p.lat:.6f}, {p.lon:.6f}): {p.elevation_m:.1f}m{suffix}")
        return "\n".join(lines)


class StatusResponse(BaseModel):
    """Response model for server status queries."""

    model_config = ConfigDict(extra="forbid")

    server: str = Field(default="chuk-mcp-swissalti3d", description="Server name")
    version: str = Field(default="0.1.0", description="Server version")
    dataset: str = Field(..., description="Dataset identifier")
    cache_dir: str = Field(..., description="Local tile cache directory")
    index_loaded: bool = Field(..., description="Whether the tile listing has been loaded")
    tiles_indexed: int = Field(default=0, description="Tiles known to the listing")
    rasters_cached: int = Field(default=0, description="Decoded tiles held in memory")
    auto_remove_temporary: bool = Field(
        default=False, description="Whether the cache directory is deleted on release"
    )
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        index = f"{self.tiles_indexed} tiles" if self.index_loaded else "not loaded"
        lines = [
            f"{self.server} v{self.version}",
            f"Dataset: {self.dataset}",
            f"Cache dir: {self.cache_dir}",
            f"Index: {index}",
            f"Rasters in memory: {self.rasters_cached}",
        ]
        if self.auto_remove_temporary:
            lines.append("Cache is removed on release")
        return "\n".join(lines)


class DatasetResponse(BaseModel):
    """Response model for the dataset description."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., description="Dataset identifier")
    name: str = Field(..., description="Human-readable dataset name")
    resolution_m: int = Field(..., description="Native resolution in metres")
    coverage: str = Field(..., description="Coverage description")
    coverage_bounds_lv95: list[int] = Field(
        ..., description="Coverage rectangle [xmin, ymin, xmax, ymax] in EPSG:2056"
    )
    horizontal_crs: str = Field(..., description="Dataset CRS")
    vertical_unit: str = Field(..., description="Unit of elevation values")
    tile_size_m: int = Field(..., description="Tile edge length in metres")
    tile_size_px: int = Field(..., description="Tile edge length in pixels")
    interpolation: bool = Field(..., description="Whether samples are interpolated")
    lookup_statuses: list[str] = Field(
        default_factory=list, description="Statuses a point lookup can report"
    )
    license: str = Field(..., description="Data license")
    access_url: str = Field(..., description="Dataset homepage")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        xmin, ymin, xmax, ymax = self.coverage_bounds_lv95
        lines = [
            f"{self.name} ({self.id})",
            f"Resolution: {self.resolution_m}m, tiles {self.tile_size_m}m / {self.tile_size_px}px",
            f"Coverage: {self.coverage}",
            f"Bounds ({self.horizontal_crs}): X {xmin}-{xmax}, Y {ymin}-{ymax}",
            f"Interpolation: {'yes' if self.interpolation else 'no'}",
            f"Lookup statuses: {', '.join(self.lookup_statuses)}",
            f"License: {self.license}",
        ]
        return "\n".join(lines)
