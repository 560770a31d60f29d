"""
MCP Tool - get-component-usage

Find every story that uses a component.
"""

from fastmcp import FastMCP
from typing import Literal

from storyblok_mcp.exceptions import StoryblokMCPError
from storyblok_mcp.services import QueryService

router = FastMCP("get_component_usage")


async def get_component_usage(
    component_name: str,
    content_status: Literal["draft", "published", "both"] = "both",
) -> dict:
    """
    Scan the space for stories using a component.

    Draft and published stories are merged by id (draft wins). The scan
    stops at a page limit; search_limit_reached tells when results may be
    incomplete.

    Args:
        component_name: Component technical name
        content_status: "draft", "published" or "both" (default)

    Returns:
        Usage count, the stories using it and scan metadata
    """
    try:
        service = QueryService()
        return await service.get_component_usage(
            component_name=component_name,
            content_status=content_status,
        )
    except StoryblokMCPError as e:
        return e.to_payload()


router.tool(name="get-component-usage")(get_component_usage)
