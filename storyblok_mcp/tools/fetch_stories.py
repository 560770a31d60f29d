"""
MCP Tool - fetch-stories

Fetch stories across draft/published versions with client-side stages.
"""

from fastmcp import FastMCP
from typing import Any, Dict, Literal, Optional

from storyblok_mcp.exceptions import StoryblokMCPError
from storyblok_mcp.services import QueryService

router = FastMCP("fetch_stories")


async def fetch_stories(
    page: int = 1,
    per_page: Optional[int] = None,
    content_status: Literal["draft", "published", "both"] = "draft",
    starts_with: Optional[str] = None,
    by_slugs: Optional[str] = None,
    excluding_slugs: Optional[str] = None,
    content_type: Optional[str] = None,
    sort_by: Optional[str] = None,
    search_term: Optional[str] = None,
    deep_filter: Optional[Dict[str, Any]] = None,
    validate_schema: bool = False,
    summary_mode: bool = False,
    fields: Optional[str] = None,
) -> dict:
    """
    Fetch stories from the Storyblok space.

    With content_status "both", draft and published stories are merged by
    id and the draft wins.

    Args:
        page: Page number (default 1)
        per_page: Stories per page (default 25, max 100)
        content_status: "draft", "published" or "both"
        starts_with: Only stories whose full slug starts with this value
        by_slugs: Comma-separated slugs to include
        excluding_slugs: Comma-separated slugs to exclude
        content_type: Root component name
        sort_by: Sort field, e.g. "created_at:desc"
        search_term: Remote search term
        deep_filter: Map of dot path -> expected value, compared as strings
            (e.g. {"content.component": "page"})
        validate_schema: Validate each story against its component schema
        summary_mode: Return only summary fields of each story
        fields: Comma-separated dot paths to return; overrides summary_mode

    Returns:
        Stories with pagination metadata
    """
    try:
        service = QueryService()
        return await service.fetch_stories(
            page=page,
            per_page=per_page,
            content_status=content_status,
            starts_with=starts_with,
            by_slugs=by_slugs,
            excluding_slugs=excluding_slugs,
            content_type=content_type,
            sort_by=sort_by,
            search_term=search_term,
            deep_filter=deep_filter,
            validate_schema=validate_schema,
            summary_mode=summary_mode,
            fields=fields,
        )
    except StoryblokMCPError as e:
        return e.to_payload()


router.tool(name="fetch-stories")(fetch_stories)
