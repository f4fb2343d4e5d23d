"""
chuk-mcp-swissalti3d: swissALTI3D Point Elevation MCP Server

Answers ground-elevation queries for WGS84 points in Switzerland from the
swisstopo swissALTI3D 2m dataset, fetching only the tiles it needs and
caching them on disk and in memory.
"""
