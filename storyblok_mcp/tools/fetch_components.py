"""
MCP Tool - fetch-components

List the components defined in the space.
"""

from fastmcp import FastMCP
from typing import Optional

from storyblok_mcp.exceptions import StoryblokMCPError
from storyblok_mcp.services import ComponentService

router = FastMCP("fetch_components")


async def fetch_components(
    filter_by_name: Optional[str] = None,
    component_summary: bool = False,
    include_schema_details: bool = True,
) -> dict:
    """
    Fetch components, with optional filtering and response shaping.

    Args:
        filter_by_name: Case-insensitive match on name or display_name
        component_summary: Return only id, name and display_name
        include_schema_details: Include each component's schema

    Returns:
        Component count and list
    """
    try:
        service = ComponentService()
        return await service.fetch_components(
            filter_by_name=filter_by_name,
            component_summary=component_summary,
            include_schema_details=include_schema_details,
        )
    except StoryblokMCPError as e:
        return e.to_payload()


router.tool(name="fetch-components")(fetch_components)
