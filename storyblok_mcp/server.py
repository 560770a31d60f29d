"""
Storyblok MCP Server - Main Entry Point

FastMCP server with STDIO and SSE transport support.
"""

import argparse
import logging
from fastmcp import FastMCP

from storyblok_mcp.config import get_settings

# Import tools (registered on their routers at import time)
from storyblok_mcp.tools import (
    fetch_stories,
    fetch_stories_by_component,
    get_component_usage,
    search_content,
    validate_story_content,
    fetch_components,
    ping,
)

ROUTERS = (
    fetch_stories.router,
    fetch_stories_by_component.router,
    get_component_usage.router,
    search_content.router,
    validate_story_content.router,
    fetch_components.router,
    ping.router,
)


def create_app() -> FastMCP:
    """Create and configure the MCP application."""
    mcp = FastMCP(
        name="storyblok-mcp",
        instructions="Query, search and validate Storyblok stories across draft and published versions",
    )

    # Register all tools
    for router in ROUTERS:
        mcp.mount(router)

    return mcp


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Storyblok MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=None,
        help="Transport protocol (default: from env)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for SSE transport (default: from env)"
    )
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(level=settings.log.level)
    transport = args.transport or settings.mcp.transport
    port = args.port or settings.mcp.port

    mcp = create_app()

    if transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport="sse", host=settings.mcp.host, port=port)


if __name__ == "__main__":
    main()
