"""
Pipeline - Projector

Builds reduced copies of stories from a list of dot paths.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from storyblok_mcp.pipeline.nodes import MISSING
from storyblok_mcp.pipeline.paths import get_path, set_path

SUMMARY_FIELDS = (
    "id",
    "name",
    "slug",
    "uuid",
    "published_at",
    "updated_at",
    "created_at",
    "parent_id",
    "full_slug",
    "content.component",
)


def parse_fields(fields: Union[str, Iterable[str], None]) -> List[str]:
    """Normalise a comma-separated string or iterable of paths."""
    if fields is None:
        return []
    if isinstance(fields, str):
        fields = fields.split(",")
    return [f.strip() for f in fields if f and f.strip()]


def project(record: Dict[str, Any], paths: Iterable[str]) -> Dict[str, Any]:
    """
    Copy the values at ``paths`` into a fresh dict.

    Paths that do not resolve are skipped.

    Args:
        record: Source story
        paths: Dot paths to keep

    Returns:
        New dict holding only the requested paths
    """
    projected: Dict[str, Any] = {}
    for path in paths:
        value = get_path(record, path)
        if value is MISSING:
            continue
        set_path(projected, path, value)
    return projected


def project_record(
    record: Dict[str, Any],
    fields: Union[str, Iterable[str], None] = None,
    summary_mode: bool = False,
) -> Dict[str, Any]:
    """
    Apply the projection stage to one story.

    Explicit ``fields`` win entirely over ``summary_mode``; with neither the
    story is returned unchanged.
    """
    paths: Optional[List[str]] = parse_fields(fields) or None
    if paths is None and summary_mode:
        paths = list(SUMMARY_FIELDS)
    if paths is None:
        return record
    return project(record, paths)
