"""
MCP Tool - ping

Server health and Storyblok connectivity.
"""

from fastmcp import FastMCP

from storyblok_mcp.exceptions import StoryblokMCPError
from storyblok_mcp.services import ComponentService

router = FastMCP("ping")


async def ping() -> dict:
    """
    Check server health and Storyblok API connectivity.

    Returns:
        status "ok", or an error_code such as STORYBLOK_API_ERROR,
        NETWORK_ERROR or CONFIGURATION_ERROR
    """
    try:
        service = ComponentService()
        return await service.ping()
    except StoryblokMCPError as e:
        payload = e.to_payload()
        payload["status"] = "error"
        return payload


router.tool(name="ping")(ping)
