"""
Pipeline - Paginated Fetcher

Walks the story listing of one content version page by page.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from storyblok_mcp.exceptions import StoryblokAPIError
from storyblok_mcp.pipeline.fetcher import MAX_PER_PAGE, StoryblokClient, Version

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Stories gathered for one version, plus how the walk ended."""
    version: str
    records: List[Dict[str, Any]] = field(default_factory=list)
    reported_total: int = 0
    pages_fetched: int = 0
    limit_reached: bool = False
    degraded: bool = False
    error: Optional[str] = None
    failed_page: Optional[int] = None

    @property
    def failed_without_data(self) -> bool:
        """The very first request failed, so nothing was gathered."""
        return self.degraded and self.pages_fetched == 0


class PaginatedFetcher:
    """Sequential page walker over StoryblokClient.fetch_page."""

    def __init__(self, client: StoryblokClient):
        self.client = client

    async def fetch_all(
        self,
        version: Version,
        per_page: int = 100,
        max_pages: int = 10,
        extra_params: Optional[Dict[str, Any]] = None,
        start_page: int = 1,
    ) -> FetchResult:
        """
        Fetch stories for ``version`` until exhausted or ``max_pages`` is hit.

        A page is only requested once the previous one is known: the walk
        goes on while fewer than the reported total were gathered and the
        last page came back full. A failed page ends the walk and keeps
        what was already gathered.

        Args:
            version: "draft" or "published"
            per_page: Page size
            max_pages: Maximum number of pages to request
            extra_params: Additional listing filters
            start_page: First page number to request

        Returns:
            FetchResult with the concatenated stories
        """
        per_page = min(per_page, MAX_PER_PAGE)
        max_pages = max(max_pages, 1)
        result = FetchResult(version=version)
        page = start_page

        while result.pages_fetched < max_pages:
            try:
                story_page = await self.client.fetch_page(
                    version, page=page, per_page=per_page, extra_params=extra_params
                )
            except StoryblokAPIError as e:
                logger.warning(f"Stopping {version} pagination at page {page}: {e.message}")
                result.degraded = True
                result.error = e.message
                result.failed_page = page
                return result

            result.records.extend(story_page.stories)
            result.reported_total = story_page.total
            result.pages_fetched += 1

            more_remaining = (
                len(result.records) < story_page.total
                and len(story_page.stories) == per_page
            )
            if not more_remaining:
                return result
            page += 1

        result.limit_reached = True
        logger.info(
            f"Page cap of {max_pages} reached for {version} stories "
            f"({len(result.records)} of {result.reported_total} fetched)"
        )
        return result
