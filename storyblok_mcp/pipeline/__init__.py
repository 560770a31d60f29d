"""
Pipeline Module - Story Query Pipeline

Handles the data flow from Storyblok to query results:
Fetch pages → Merge versions → Match / Project
"""

from storyblok_mcp.pipeline.fetcher import StoryblokClient, StoryPage
from storyblok_mcp.pipeline.paginator import PaginatedFetcher, FetchResult
from storyblok_mcp.pipeline.merger import MergeResult, merge_versions
from storyblok_mcp.pipeline.paths import get_path, set_path
from storyblok_mcp.pipeline.matcher import component_usage_match, deep_text_match
from storyblok_mcp.pipeline.projector import project, project_record

__all__ = [
    "StoryblokClient",
    "StoryPage",
    "PaginatedFetcher",
    "FetchResult",
    "MergeResult",
    "merge_versions",
    "get_path",
    "set_path",
    "component_usage_match",
    "deep_text_match",
    "project",
    "project_record",
]
