"""
Pipeline - Storyblok Client

REST access to the Storyblok Content Delivery and Management APIs.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

import httpx

from storyblok_mcp.config import get_settings
from storyblok_mcp.exceptions import StoryblokAPIError

logger = logging.getLogger(__name__)

Version = Literal["draft", "published"]

MAX_PER_PAGE = 100


@dataclass
class StoryPage:
    """One page of a story listing."""
    stories: List[Dict[str, Any]]
    total: int
    per_page: int
    page: int


class StoryblokClient:
    """Fetches stories and component schemas from a Storyblok space."""

    def __init__(self, settings=None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.config = self.settings.storyblok
        self.content_url = self.config.content_api_url.rstrip("/")
        self.management_url = self.config.management_api_url.rstrip("/")
        self._transport = transport
        self._semaphore = asyncio.Semaphore(self.config.concurrency)

    def _client(self, **kwargs) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
            transport=self._transport,
            **kwargs,
        )

    async def _get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        async with self._semaphore:
            async with self._client(headers=headers) as client:
                try:
                    response = await client.get(url, params=params)
                    response.raise_for_status()
                except httpx.HTTPStatusError as e:
                    raise StoryblokAPIError(
                        f"API request failed: {e.response.status_code} "
                        f"{e.response.reason_phrase} - {e.response.text}",
                        status_code=e.response.status_code,
                        url=url,
                    ) from e
                except httpx.RequestError as e:
                    raise StoryblokAPIError(
                        f"Network error when reaching Storyblok API: {e}",
                        url=url,
                    ) from e
        return response

    def _management_headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.config.management_token,
            "Content-Type": "application/json",
        }

    @staticmethod
    def _decode(response: httpx.Response, url: str) -> Dict[str, Any]:
        """Parse a JSON object body; anything else is an API failure."""
        try:
            data = response.json()
        except ValueError as e:
            raise StoryblokAPIError(
                f"Invalid JSON from Storyblok API: {e}",
                status_code=response.status_code,
                url=url,
            ) from e
        if not isinstance(data, dict):
            raise StoryblokAPIError(
                f"Unexpected response body from Storyblok API: {type(data).__name__}",
                status_code=response.status_code,
                url=url,
            )
        return data

    async def fetch_page(
        self,
        version: Version,
        page: int = 1,
        per_page: int = 25,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> StoryPage:
        """
        Fetch one page of stories for a content version.

        Args:
            version: "draft" or "published"
            page: 1-based page number
            per_page: Page size (capped at 100)
            extra_params: Additional Content Delivery API filters

        Returns:
            StoryPage with the stories and the reported total
        """
        per_page = min(per_page, MAX_PER_PAGE)
        params: Dict[str, Any] = {
            "token": self.config.public_token,
            "version": version,
            "page": page,
            "per_page": per_page,
        }
        for key, value in (extra_params or {}).items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = str(value).lower()
            params[key] = value

        url = f"{self.content_url}/cdn/stories"
        response = await self._get(url, params=params)
        data = self._decode(response, url)

        total = data.get("total")
        if total is None:
            total = response.headers.get("total", 0)
        stories = data.get("stories", [])
        if not isinstance(stories, list):
            raise StoryblokAPIError(
                f"Malformed story listing: 'stories' is {type(stories).__name__}",
                status_code=response.status_code,
                url=url,
            )
        try:
            total = int(total)
            page_size = int(data.get("per_page") or response.headers.get("per-page") or per_page)
        except (TypeError, ValueError) as e:
            raise StoryblokAPIError(
                f"Malformed pagination metadata: {e}",
                status_code=response.status_code,
                url=url,
            ) from e
        logger.debug(f"Fetched {version} page {page}: {len(stories)} stories (total {total})")

        return StoryPage(stories=stories, total=total, per_page=page_size, page=page)

    async def list_components(self) -> List[Dict[str, Any]]:
        """List every component defined in the space."""
        url = f"{self.management_url}/spaces/{self.config.space_id}/components"
        response = await self._get(url, headers=self._management_headers())
        return self._decode(response, url).get("components", [])

    async def fetch_schema(self, component_name: str) -> Optional[Dict[str, Any]]:
        """
        Look up the field schema of a component by its technical name.

        Always hits the API; nothing is cached between calls.

        Args:
            component_name: Component technical name

        Returns:
            Schema dict, or None if the component does not exist
        """
        for component in await self.list_components():
            if component.get("name") == component_name:
                return component.get("schema") or {}
        return None

    async def ping(self) -> bool:
        """Check that the space is reachable with the public token."""
        url = f"{self.content_url}/cdn/spaces/me"
        await self._get(url, params={"token": self.config.public_token})
        return True
