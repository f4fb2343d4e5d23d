"""MCP tool registrations for chuk-mcp-swissalti3d."""
