"""
Tools Module - MCP Tool Implementations

Story query, component and health tools for a Storyblok space.
"""

from storyblok_mcp.tools import fetch_stories
from storyblok_mcp.tools import fetch_stories_by_component
from storyblok_mcp.tools import get_component_usage
from storyblok_mcp.tools import search_content
from storyblok_mcp.tools import validate_story_content
from storyblok_mcp.tools import fetch_components
from storyblok_mcp.tools import ping

__all__ = [
    "fetch_stories",
    "fetch_stories_by_component",
    "get_component_usage",
    "search_content",
    "validate_story_content",
    "fetch_components",
    "ping",
]
