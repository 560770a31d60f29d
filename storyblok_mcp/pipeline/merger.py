"""
Pipeline - Version Merger

Combines the draft and published views of a space into one story set.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional

from storyblok_mcp.pipeline.paginator import FetchResult

logger = logging.getLogger(__name__)

ContentStatus = Literal["draft", "published", "both"]

CONTENT_STATUSES = ("draft", "published", "both")

FetchFn = Callable[[str], Awaitable[FetchResult]]


@dataclass
class MergeResult:
    """Merged stories for one query."""
    records: List[Dict[str, Any]]
    total_from_api: Optional[int]
    per_version: Dict[str, FetchResult] = field(default_factory=dict)

    @property
    def limit_reached(self) -> bool:
        """True if any version stopped at the page cap."""
        return any(r.limit_reached for r in self.per_version.values())

    @property
    def degraded(self) -> bool:
        """True if any version stopped on a failed page."""
        return any(r.degraded for r in self.per_version.values())

    @property
    def errors(self) -> Dict[str, str]:
        """Failure message per degraded version."""
        return {
            version: r.error
            for version, r in self.per_version.items()
            if r.degraded and r.error
        }


def merge_records(
    published: List[Dict[str, Any]],
    draft: List[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Merge two story lists by ``id``, draft winning on collision.

    Published stories are inserted first; a draft with the same id replaces
    the entry in place, draft-only stories are appended. Stories without an
    id never collide and are all kept.
    """
    merged: Dict[Any, Dict[str, Any]] = {}
    for story in list(published) + list(draft):
        story_id = story.get("id")
        key = ("id", story_id) if story_id is not None else ("object", id(story))
        merged[key] = story
    return list(merged.values())


async def merge_versions(content_status: ContentStatus, fetch_fn: FetchFn) -> MergeResult:
    """
    Fetch the requested version(s) and merge them.

    For "both" the two versions are fetched concurrently; precedence comes
    from the merge, not from arrival order. The reported total is the draft
    total.

    Args:
        content_status: "draft", "published" or "both"
        fetch_fn: Coroutine function returning a FetchResult for a version

    Returns:
        MergeResult with the merged stories
    """
    if content_status not in CONTENT_STATUSES:
        raise ValueError(f"Unknown content_status: {content_status}")

    if content_status == "both":
        published, draft = await asyncio.gather(
            fetch_fn("published"),
            fetch_fn("draft"),
        )
        records = merge_records(published.records, draft.records)
        logger.debug(
            f"Merged {len(published.records)} published and {len(draft.records)} "
            f"draft stories into {len(records)}"
        )
        return MergeResult(
            records=records,
            total_from_api=None if draft.failed_without_data else draft.reported_total,
            per_version={"published": published, "draft": draft},
        )

    result = await fetch_fn(content_status)
    return MergeResult(
        records=list(result.records),
        total_from_api=None if result.failed_without_data else result.reported_total,
        per_version={content_status: result},
    )
