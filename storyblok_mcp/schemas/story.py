"""
Schemas - Story Models

Pydantic models for story listings.
"""

from pydantic import BaseModel
from typing import Any, Dict, List, Optional, Union


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


class StorySummary(BaseModel):
    """Identifying fields of a story returned in match lists."""
    id: Optional[Union[int, str]] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    full_slug: Optional[str] = None

    @classmethod
    def from_story(cls, story: Dict[str, Any]) -> "StorySummary":
        """Build from a raw story; values of the wrong type become None."""
        story_id = story.get("id")
        if isinstance(story_id, bool) or not isinstance(story_id, (int, str)):
            story_id = None
        return cls(
            id=story_id,
            name=_text(story.get("name")),
            slug=_text(story.get("slug")),
            full_slug=_text(story.get("full_slug")),
        )


class SearchMatch(StorySummary):
    """Story matched by a content search."""
    component: Optional[str] = None
    matched_fields: List[str] = []
