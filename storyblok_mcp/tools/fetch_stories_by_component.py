"""
MCP Tool - fetch-stories-by-component

Stories using a given component anywhere in their content.
"""

from fastmcp import FastMCP
from typing import Literal, Optional

from storyblok_mcp.exceptions import StoryblokMCPError
from storyblok_mcp.services import QueryService

router = FastMCP("fetch_stories_by_component")


async def fetch_stories_by_component(
    component_name: str,
    content_status: Literal["draft", "published", "both"] = "both",
    page: int = 1,
    per_page: Optional[int] = None,
    starts_with: Optional[str] = None,
) -> dict:
    """
    Fetch a page of stories and keep those that use a component.

    Nested components are matched at any depth.

    Args:
        component_name: Component technical name
        content_status: "draft", "published" or "both" (default)
        page: Page number (default 1)
        per_page: Stories per page (default 25, max 100)
        starts_with: Only stories whose full slug starts with this value

    Returns:
        Matching stories and pagination metadata before filtering
    """
    try:
        service = QueryService()
        return await service.fetch_stories_by_component(
            component_name=component_name,
            content_status=content_status,
            page=page,
            per_page=per_page,
            starts_with=starts_with,
        )
    except StoryblokMCPError as e:
        return e.to_payload()


router.tool(name="fetch-stories-by-component")(fetch_stories_by_component)
