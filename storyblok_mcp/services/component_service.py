"""
Services - Component Service

Component listing with response shaping, and space health checks.
"""

import logging
from typing import Any, Dict, List, Optional

from storyblok_mcp.config import get_settings
from storyblok_mcp.exceptions import StoryblokAPIError
from storyblok_mcp.pipeline.fetcher import StoryblokClient

logger = logging.getLogger(__name__)


def shape_components(
    components: List[Dict[str, Any]],
    filter_by_name: Optional[str] = None,
    component_summary: bool = False,
    include_schema_details: bool = True,
) -> List[Dict[str, Any]]:
    """
    Filter and reshape a component listing.

    Args:
        components: Components as returned by the Management API
        filter_by_name: Case-insensitive substring of name or display_name
        component_summary: Keep only id, name and display_name
        include_schema_details: Drop ``schema`` when False

    Returns:
        Shaped component list
    """
    if filter_by_name:
        needle = filter_by_name.lower()
        components = [
            c for c in components
            if needle in (c.get("name") or "").lower()
            or needle in (c.get("display_name") or "").lower()
        ]

    if component_summary:
        return [
            {"id": c.get("id"), "name": c.get("name"), "display_name": c.get("display_name")}
            for c in components
        ]
    if not include_schema_details:
        return [{k: v for k, v in c.items() if k != "schema"} for c in components]
    return components


class ComponentService:
    """Component listing and connectivity checks."""

    def __init__(self, settings=None, client: Optional[StoryblokClient] = None):
        self.settings = settings or get_settings()
        self.client = client or StoryblokClient(self.settings)

    async def fetch_components(
        self,
        filter_by_name: Optional[str] = None,
        component_summary: bool = False,
        include_schema_details: bool = True,
    ) -> Dict[str, Any]:
        """List the space's components, shaped for the caller."""
        components = shape_components(
            await self.client.list_components(),
            filter_by_name=filter_by_name,
            component_summary=component_summary,
            include_schema_details=include_schema_details,
        )
        return {"components_count": len(components), "components": components}

    async def ping(self) -> Dict[str, Any]:
        """
        Check that the Storyblok space answers.

        Returns:
            Status dict; failures carry an error_code instead of raising
        """
        try:
            await self.client.ping()
        except StoryblokAPIError as e:
            logger.warning(f"Ping failed: {e.message}")
            payload = e.to_payload()
            payload["status"] = "error"
            return payload
        return {
            "status": "ok",
            "message": "Server is running and Storyblok API is reachable.",
        }
