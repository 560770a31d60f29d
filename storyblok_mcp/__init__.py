"""Storyblok MCP Server - draft/published story queries over MCP."""

__version__ = "0.1.0"
