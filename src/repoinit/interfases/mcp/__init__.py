"""MCP exposure for repoinit."""
