"""
Shared fixtures: settings and an in-memory Storyblok client.
"""

import pytest

from storyblok_mcp.config import QuerySettings, Settings, StoryblokSettings
from storyblok_mcp.exceptions import StoryblokAPIError
from storyblok_mcp.pipeline.fetcher import StoryPage


def make_settings(**query) -> Settings:
    return Settings(
        storyblok=StoryblokSettings(
            STORYBLOK_SPACE_ID="12345",
            STORYBLOK_MANAGEMENT_TOKEN="mgmt-token",
            STORYBLOK_DEFAULT_PUBLIC_TOKEN="public-token",
        ),
        query=QuerySettings(**query),
    )


class FakeStoryblokClient:
    """Serves story pages from lists, one list per version."""

    def __init__(self, stories=None, totals=None, fail_pages=None, schemas=None):
        self.stories = stories or {}
        self.totals = totals or {}
        self.fail_pages = fail_pages or {}
        self.schemas = schemas or {}
        self.page_calls = []
        self.schema_calls = []

    async def fetch_page(self, version, page=1, per_page=25, extra_params=None):
        self.page_calls.append({
            "version": version,
            "page": page,
            "per_page": per_page,
            "extra_params": extra_params,
        })
        if page in self.fail_pages.get(version, ()):
            raise StoryblokAPIError("API request failed: 500", status_code=500)
        all_stories = self.stories.get(version, [])
        start = (page - 1) * per_page
        return StoryPage(
            stories=all_stories[start:start + per_page],
            total=self.totals.get(version, len(all_stories)),
            per_page=per_page,
            page=page,
        )

    async def fetch_schema(self, component_name):
        self.schema_calls.append(component_name)
        return self.schemas.get(component_name)

    def versions_called(self):
        return [c["version"] for c in self.page_calls]


@pytest.fixture
def settings():
    return make_settings()
