"""
Services - Query Service

Aggregated story queries: fetch and merge draft/published versions, then
filter, validate and project the merged stories.
"""

import asyncio
import json
import logging
import math
from typing import Any, Dict, List, Optional

from storyblok_mcp.config import get_settings
from storyblok_mcp.exceptions import QueryError, StoryblokAPIError
from storyblok_mcp.pipeline.fetcher import MAX_PER_PAGE, StoryblokClient
from storyblok_mcp.pipeline.matcher import (
    component_of,
    component_usage_match,
    deep_text_match,
    text_contains,
)
from storyblok_mcp.pipeline.merger import (
    CONTENT_STATUSES,
    ContentStatus,
    MergeResult,
    merge_versions,
)
from storyblok_mcp.pipeline.nodes import MISSING
from storyblok_mcp.pipeline.paginator import PaginatedFetcher
from storyblok_mcp.pipeline.paths import get_path
from storyblok_mcp.pipeline.projector import parse_fields, project_record
from storyblok_mcp.schemas.story import SearchMatch, StorySummary
from storyblok_mcp.schemas.validation import StoryValidation
from storyblok_mcp.services.schema_validator import SchemaValidator

logger = logging.getLogger(__name__)

SCHEMA_NOT_FOUND = "schema_not_found"


def stringify(value: Any) -> str:
    """
    Loose string form used by ``deep_filter`` comparisons.

    Mirrors JSON spelling for scalars, so ``True`` is ``"true"``, ``None``
    is ``"null"`` and ``1.0`` is ``"1"``. ``0`` and ``"0"`` compare equal.
    """
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def matches_deep_filter(story: Dict[str, Any], deep_filter: Dict[str, Any]) -> bool:
    """Every path in ``deep_filter`` must stringify to its expected value."""
    return all(
        stringify(get_path(story, path)) == stringify(expected)
        for path, expected in deep_filter.items()
    )


def total_pages(total: Optional[int], per_page: int) -> int:
    if not total or per_page <= 0:
        return 0
    return math.ceil(total / per_page)


class QueryService:
    """Runs multi-version story queries against one Storyblok space."""

    def __init__(self, settings=None, client: Optional[StoryblokClient] = None):
        self.settings = settings or get_settings()
        self.client = client or StoryblokClient(self.settings)
        self.paginator = PaginatedFetcher(self.client)
        self.validator = SchemaValidator()

    # ------------------------------------------------------------------
    # Fetch + merge
    # ------------------------------------------------------------------
    async def _fetch_merged(
        self,
        content_status: ContentStatus,
        per_page: int,
        max_pages: int = 1,
        start_page: int = 1,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> MergeResult:
        async def fetch(version: str):
            return await self.paginator.fetch_all(
                version,
                per_page=per_page,
                max_pages=max_pages,
                extra_params=extra_params,
                start_page=start_page,
            )

        if content_status not in CONTENT_STATUSES:
            raise QueryError(
                f"content_status must be one of {', '.join(CONTENT_STATUSES)}, "
                f"got {content_status!r}",
                stage="input",
            )

        merged = await merge_versions(content_status, fetch)

        if all(r.failed_without_data for r in merged.per_version.values()):
            messages = "; ".join(f"{v}: {err}" for v, err in merged.errors.items())
            raise QueryError(f"Could not fetch stories ({messages})", stage="fetch")

        return merged

    def _per_page(self, per_page: Optional[int]) -> int:
        return min(per_page or self.settings.query.default_per_page, MAX_PER_PAGE)

    @staticmethod
    def _degradation(merged: MergeResult) -> Dict[str, Any]:
        if not merged.degraded:
            return {}
        return {"degraded_versions": merged.errors}

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    async def _validate_story(self, story: Dict[str, Any]) -> StoryValidation:
        content = story.get("content")
        component = component_of(content)
        annotation = await self._validate(content, component)
        annotation.story_id = StorySummary.from_story(story).id
        return annotation

    async def _validate(self, content: Any, component: Optional[str]) -> StoryValidation:
        if not component:
            return StoryValidation(
                component=None,
                schema_found=False,
                error="Content has no component name to validate against",
            )

        try:
            schema = await self.client.fetch_schema(component)
        except StoryblokAPIError as e:
            logger.warning(f"Schema lookup for '{component}' failed: {e.message}")
            return StoryValidation(
                component=component,
                schema_found=False,
                error=f"schema_lookup_failed: {e.message}",
            )

        if schema is None:
            return StoryValidation(
                component=component,
                schema_found=False,
                error=SCHEMA_NOT_FOUND,
            )

        return StoryValidation(
            component=component,
            schema_found=True,
            validation=self.validator.validate(content, schema),
        )

    async def validate_content(
        self,
        content: Dict[str, Any],
        component_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Validate one content mapping against its component schema.

        Args:
            content: Component instance
            component_name: Schema to use (default: content["component"])

        Returns:
            Annotation dict with schema_found and the validation report
        """
        if not isinstance(content, dict):
            raise QueryError("content must be an object", stage="input")
        component = component_name or component_of(content)
        annotation = await self._validate(content, component)
        return annotation.model_dump(exclude={"story_id"})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    async def fetch_stories(
        self,
        page: int = 1,
        per_page: Optional[int] = None,
        content_status: ContentStatus = "draft",
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
    ) -> Dict[str, Any]:
        """
        Fetch one page of stories with optional client-side stages.

        Stages run in order and only when requested: deep_filter,
        schema validation, projection (fields win over summary_mode).

        Returns:
            Stories with pagination metadata
        """
        per_page = self._per_page(per_page)
        merged = await self._fetch_merged(
            content_status,
            per_page=per_page,
            start_page=page,
            extra_params={
                "starts_with": starts_with,
                "by_slugs": by_slugs,
                "excluding_slugs": excluding_slugs,
                "content_type": content_type,
                "sort_by": sort_by,
                "search_term": search_term,
            },
        )
        stories = merged.records
        result: Dict[str, Any] = {}

        if deep_filter:
            before = len(stories)
            stories = [s for s in stories if matches_deep_filter(s, deep_filter)]
            result["deep_filter_applied"] = deep_filter
            result["stories_before_deep_filter"] = before

        if validate_schema:
            annotations = await asyncio.gather(*(self._validate_story(s) for s in stories))
            result["validation_results"] = [a.model_dump() for a in annotations]

        if fields or summary_mode:
            stories = [project_record(s, fields, summary_mode) for s in stories]

        result.update({
            "stories": stories,
            "stories_count_current_response": len(stories),
            "total_items_from_api": merged.total_from_api,
            "total_pages_api": total_pages(merged.total_from_api, per_page),
            "current_page": page,
            "per_page_requested": per_page,
        })
        result.update(self._degradation(merged))
        return result

    async def fetch_stories_by_component(
        self,
        component_name: str,
        content_status: ContentStatus = "both",
        page: int = 1,
        per_page: Optional[int] = None,
        starts_with: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Fetch one page of stories and keep those using a component anywhere.

        Args:
            component_name: Component technical name
            content_status: "draft", "published" or "both"
            page: Page number requested from the API
            per_page: Page size
            starts_with: Slug prefix filter

        Returns:
            Matching stories with pre-filter pagination metadata
        """
        per_page = self._per_page(per_page)
        merged = await self._fetch_merged(
            content_status,
            per_page=per_page,
            start_page=page,
            extra_params={"starts_with": starts_with},
        )
        matches = [
            s for s in merged.records
            if component_usage_match(s.get("content"), component_name)
        ]

        result = {
            "stories": matches,
            "stories_found_after_filter": len(matches),
            "component_name_filter": component_name,
            "api_total_items_before_component_filter": merged.total_from_api,
            "api_total_pages_before_component_filter": total_pages(
                merged.total_from_api, per_page
            ),
            "current_page_requested": page,
            "per_page_requested": per_page,
        }
        result.update(self._degradation(merged))
        return result

    async def get_component_usage(
        self,
        component_name: str,
        content_status: ContentStatus = "both",
    ) -> Dict[str, Any]:
        """
        Scan all stories of the space for uses of a component.

        Pages through every requested version up to the configured page cap
        and reports when the scan may be incomplete.

        Args:
            component_name: Component technical name
            content_status: "draft", "published" or "both"

        Returns:
            Usage count and the stories using the component
        """
        per_page = self.settings.query.scan_per_page
        max_pages = self.settings.query.max_pages
        merged = await self._fetch_merged(
            content_status, per_page=per_page, max_pages=max_pages
        )

        used_in = [
            StorySummary.from_story(s).model_dump()
            for s in merged.records
            if component_usage_match(s.get("content"), component_name)
        ]
        logger.info(
            f"Component '{component_name}' used in {len(used_in)} of "
            f"{len(merged.records)} stories"
        )

        result: Dict[str, Any] = {
            "component_name": component_name,
            "usage_count": len(used_in),
            "used_in_stories": used_in,
            "stories_analyzed_count": len(merged.records),
            "total_items_from_api": merged.total_from_api,
            "search_limit_reached": merged.limit_reached,
        }
        reasons = []
        if merged.limit_reached:
            reasons.append(
                f"Stopped after {max_pages} pages of {per_page} stories per version; "
                "usage may be incomplete."
            )
        if merged.degraded:
            reasons.append("Some pages failed to load; usage may be incomplete.")
        if reasons:
            result["search_incomplete_reason"] = " ".join(reasons)
        result.update(self._degradation(merged))
        return result

    async def search_content(
        self,
        query: str,
        fields_to_search: Optional[List[str]] = None,
        content_types: Optional[List[str]] = None,
        deep_search_nested_components: bool = False,
        content_status: ContentStatus = "draft",
        page: int = 1,
        per_page: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Full-text search over story content fields.

        A single content type is sent to the API as ``content_type``;
        several are filtered locally on ``content.component``. Field paths
        are relative to ``content``. Without fields the whole content tree
        is searched deeply.

        Returns:
            Matched stories with search and pagination metadata
        """
        if not query or not query.strip():
            raise QueryError("query must not be empty", stage="input")

        per_page = self._per_page(per_page)
        content_types = [t for t in (content_types or []) if t]
        extra_params = {"content_type": content_types[0]} if len(content_types) == 1 else {}

        merged = await self._fetch_merged(
            content_status, per_page=per_page, start_page=page, extra_params=extra_params
        )

        stories = merged.records
        if len(content_types) > 1:
            allowed = set(content_types)
            stories = [s for s in stories if component_of(s.get("content")) in allowed]

        fields = parse_fields(fields_to_search)
        matched: List[Dict[str, Any]] = []
        for story in stories:
            content = story.get("content")
            matched_fields = self._match_fields(
                content, query, fields, deep_search_nested_components
            )
            if matched_fields:
                match = SearchMatch(
                    **StorySummary.from_story(story).model_dump(),
                    component=component_of(content),
                    matched_fields=matched_fields,
                )
                matched.append(match.model_dump())

        result = {
            "query": query,
            "matches_found_count": len(matched),
            "matched_stories": matched,
            "stories_analyzed_count": len(stories),
            "total_items_from_api_before_search": merged.total_from_api,
            "total_pages_api": total_pages(merged.total_from_api, per_page),
            "current_page_requested": page,
            "per_page_requested": per_page,
        }
        result.update(self._degradation(merged))
        return result

    @staticmethod
    def _match_fields(
        content: Any,
        query: str,
        fields: List[str],
        deep: bool,
    ) -> List[str]:
        if not fields:
            return ["content"] if deep_text_match(content, query) else []

        matched = []
        for path in fields:
            value = get_path(content, path)
            if value is MISSING:
                continue
            hit = deep_text_match(value, query) if deep else text_contains(value, query)
            if hit:
                matched.append(path)
        return matched
