"""
MCP Tool - search-content

Full-text search inside story content.
"""

from fastmcp import FastMCP
from typing import List, Literal, Optional

from storyblok_mcp.exceptions import StoryblokMCPError
from storyblok_mcp.services import QueryService

router = FastMCP("search_content")


async def search_content(
    query: str,
    fields_to_search: Optional[List[str]] = None,
    content_types: Optional[List[str]] = None,
    deep_search_nested_components: bool = False,
    content_status: Literal["draft", "published", "both"] = "draft",
    page: int = 1,
    per_page: Optional[int] = None,
) -> dict:
    """
    Search story content for a text (case-insensitive).

    Args:
        query: Text to look for
        fields_to_search: Content field paths, e.g. ["title", "body.0.text"];
            the whole content is searched when omitted
        content_types: Root component names to restrict the search to
        deep_search_nested_components: Search inside nested components of
            each field instead of only plain text fields
        content_status: "draft" (default), "published" or "both"
        page: Page number (default 1)
        per_page: Stories per page (default 25, max 100)

    Returns:
        Matched stories with the fields that matched
    """
    try:
        service = QueryService()
        return await service.search_content(
            query=query,
            fields_to_search=fields_to_search,
            content_types=content_types,
            deep_search_nested_components=deep_search_nested_components,
            content_status=content_status,
            page=page,
            per_page=per_page,
        )
    except StoryblokMCPError as e:
        return e.to_payload()


router.tool(name="search-content")(search_content)
