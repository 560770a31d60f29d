"""
MCP Tool - validate-story-content

Validate content against a component schema.
"""

from fastmcp import FastMCP
from typing import Any, Dict, Optional

from storyblok_mcp.exceptions import StoryblokMCPError
from storyblok_mcp.services import QueryService

router = FastMCP("validate_story_content")


async def validate_story_content(
    content: Dict[str, Any],
    component_name: Optional[str] = None,
) -> dict:
    """
    Check content for missing required fields and undeclared fields.

    Args:
        content: Component content object
        component_name: Schema to validate against (default: content.component)

    Returns:
        schema_found flag and the validation report
    """
    try:
        service = QueryService()
        return await service.validate_content(content, component_name)
    except StoryblokMCPError as e:
        return e.to_payload()


router.tool(name="validate-story-content")(validate_story_content)
