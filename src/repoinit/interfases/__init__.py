"""Exposure surfaces (CLI and MCP) for repoinit."""
