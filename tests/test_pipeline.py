"""
Unit Tests for Pipeline Module
"""

import pytest

from storyblok_mcp.pipeline.matcher import component_usage_match, deep_text_match
from storyblok_mcp.pipeline.merger import merge_records, merge_versions
from storyblok_mcp.pipeline.nodes import MISSING, NodeKind, kind_of
from storyblok_mcp.pipeline.paginator import FetchResult, PaginatedFetcher
from storyblok_mcp.pipeline.paths import get_path, set_path
from storyblok_mcp.pipeline.projector import SUMMARY_FIELDS, project, project_record

from tests.conftest import FakeStoryblokClient


class TestPaths:
    """Tests for get_path / set_path."""

    def test_get_nested_and_indexed(self):
        tree = {"content": {"body": [{"component": "text"}, {"component": "image"}]}}

        assert get_path(tree, "content.body.1.component") == "image"
        assert get_path(tree, "content.body.0") == {"component": "text"}

    def test_get_unresolved_paths_are_missing(self):
        tree = {"a": [1, 2], "b": "text", "c": None}

        assert get_path(tree, "x") is MISSING
        assert get_path(tree, "a.5") is MISSING
        assert get_path(tree, "a.-1") is MISSING
        assert get_path(tree, "a.name") is MISSING
        assert get_path(tree, "b.length") is MISSING
        assert get_path(tree, "c.d") is MISSING

    def test_get_null_is_a_value(self):
        assert get_path({"parent_id": None}, "parent_id") is None

    def test_get_ignores_attributes(self):
        assert get_path({}, "keys") is MISSING
        assert get_path({"a": "x"}, "a.upper") is MISSING

    def test_set_creates_dicts_and_lists(self):
        tree = {}
        set_path(tree, "content.body.0.component", "text")

        assert tree == {"content": {"body": [{"component": "text"}]}}

    def test_set_grows_lists(self):
        tree = {"items": []}
        set_path(tree, "items.2", "c")

        assert tree == {"items": [None, None, "c"]}

    def test_set_overwrites_scalar_intermediates(self):
        tree = {"content": "flat"}
        set_path(tree, "content.title", "Hello")

        assert tree == {"content": {"title": "Hello"}}

    @pytest.mark.parametrize("path", ["id", "content.title", "content.body.0.text", "a.b.c.d"])
    def test_set_then_get_round_trip(self, path):
        tree = {"id": 1, "content": {"body": []}}
        set_path(tree, path, "value")

        assert get_path(tree, path) == "value"


class TestTreeMatcher:
    """Tests for component_usage_match / deep_text_match."""

    story = {
        "component": "page_layout",
        "body": [
            {"component": "hero", "title": "Welcome"},
            {"component": "grid", "columns": [{"component": "card", "title": "Card 1"}]},
        ],
    }

    def test_kind_tags(self):
        assert kind_of({}) is NodeKind.MAPPING
        assert kind_of([]) is NodeKind.SEQUENCE
        assert kind_of("x") is NodeKind.SCALAR
        assert kind_of(None) is NodeKind.SCALAR

    def test_component_at_root_and_nested(self):
        assert component_usage_match(self.story, "page_layout")
        assert component_usage_match(self.story, "hero")
        assert component_usage_match(self.story, "card")
        assert not component_usage_match(self.story, "footer")

    def test_component_inside_top_level_list(self):
        assert component_usage_match([[{"component": "deep"}]], "deep")

    def test_component_empty_inputs(self):
        assert not component_usage_match(None, "hero")
        assert not component_usage_match({}, "hero")
        assert not component_usage_match([], "hero")

    def test_component_field_value_must_be_on_type_field(self):
        assert not component_usage_match({"title": "hero"}, "hero")

    def test_deep_text_case_insensitive_by_default(self):
        assert deep_text_match({"a": "Hello"}, "hello")
        assert not deep_text_match({"a": "Hello"}, "hello", case_insensitive=False)

    def test_deep_text_nested(self):
        assert deep_text_match(self.story, "card 1")
        assert not deep_text_match(self.story, "missing text")

    def test_deep_text_ignores_non_strings(self):
        assert not deep_text_match({"n": 42, "b": True, "z": None}, "42")
        assert not deep_text_match({"b": True}, "true")

    def test_deep_text_scalar_root(self):
        assert deep_text_match("Find ME here", "find me")

    def test_self_reference_terminates(self):
        tree = {"component": "loop"}
        tree["self"] = tree
        tree["items"] = [tree]

        assert component_usage_match(tree, "loop")
        assert not component_usage_match(tree, "other")
        assert not deep_text_match(tree, "nothing")

    def test_cycle_through_list(self):
        items = []
        items.append(items)
        node = {"children": items, "text": "found"}
        items.append(node)

        assert deep_text_match(items, "found")
        assert not deep_text_match(items, "absent")

    def test_very_deep_tree(self):
        tree = {"component": "leaf", "text": "bottom"}
        for _ in range(5000):
            tree = {"component": "wrapper", "child": tree}

        assert component_usage_match(tree, "leaf")
        assert deep_text_match(tree, "bottom")


class TestProjector:
    """Tests for project / project_record."""

    story = {
        "id": 1, "name": "Full Story", "slug": "full-story", "uuid": "abc-123",
        "published_at": "2023-01-01T00:00:00.000Z",
        "updated_at": "2023-01-02T00:00:00.000Z",
        "created_at": "2023-01-01T00:00:00.000Z",
        "parent_id": None, "full_slug": "full-story-slug",
        "content": {
            "component": "page", "title": "Full Title",
            "body": [{"component": "text", "text": "Hello"}],
        },
        "other_field": "should be excluded",
    }

    def test_top_level_fields(self):
        assert project(self.story, ["id", "name"]) == {"id": 1, "name": "Full Story"}

    def test_nested_and_indexed_fields(self):
        assert project(self.story, ["id", "content.body.0.component"]) == {
            "id": 1,
            "content": {"body": [{"component": "text"}]},
        }

    def test_missing_fields_skipped(self):
        assert project(self.story, ["id", "non_existent", "content.nope"]) == {"id": 1}

    def test_summary_mode(self):
        result = project_record(self.story, summary_mode=True)

        assert set(result) == {p.split(".")[0] for p in SUMMARY_FIELDS}
        assert result["parent_id"] is None
        assert result["content"] == {"component": "page"}
        assert "other_field" not in result

    def test_fields_win_over_summary(self):
        result = project_record(self.story, fields="id,slug,content.title", summary_mode=True)

        assert result == {"id": 1, "slug": "full-story", "content": {"title": "Full Title"}}

    def test_no_projection_returns_story(self):
        assert project_record(self.story) is self.story
        assert project_record(self.story, fields="", summary_mode=False) is self.story


class TestPaginatedFetcher:
    """Tests for PaginatedFetcher."""

    @pytest.mark.asyncio
    async def test_stops_at_page_cap(self):
        stories = [{"id": i} for i in range(50)]
        client = FakeStoryblokClient(stories={"draft": stories})

        result = await PaginatedFetcher(client).fetch_all("draft", per_page=2, max_pages=10)

        assert len(client.page_calls) == 10
        assert len(result.records) == 20
        assert result.limit_reached is True
        assert result.reported_total == 50

    @pytest.mark.asyncio
    async def test_stops_when_total_reached(self):
        stories = [{"id": i} for i in range(4)]
        client = FakeStoryblokClient(stories={"published": stories})

        result = await PaginatedFetcher(client).fetch_all("published", per_page=2)

        assert [c["page"] for c in client.page_calls] == [1, 2]
        assert len(result.records) == 4
        assert result.limit_reached is False

    @pytest.mark.asyncio
    async def test_stops_on_short_page(self):
        client = FakeStoryblokClient(
            stories={"draft": [{"id": 1}]},
            totals={"draft": 30},
        )

        result = await PaginatedFetcher(client).fetch_all("draft", per_page=100)

        assert len(client.page_calls) == 1
        assert result.records == [{"id": 1}]
        assert result.limit_reached is False

    @pytest.mark.asyncio
    async def test_failed_page_keeps_earlier_records(self):
        stories = [{"id": i} for i in range(6)]
        client = FakeStoryblokClient(stories={"draft": stories}, fail_pages={"draft": {2}})

        result = await PaginatedFetcher(client).fetch_all("draft", per_page=2)

        assert len(client.page_calls) == 2
        assert result.records == [{"id": 0}, {"id": 1}]
        assert result.degraded is True
        assert result.failed_page == 2
        assert result.failed_without_data is False

    @pytest.mark.asyncio
    async def test_first_page_failure(self):
        client = FakeStoryblokClient(fail_pages={"draft": {1}})

        result = await PaginatedFetcher(client).fetch_all("draft")

        assert result.records == []
        assert result.failed_without_data is True

    @pytest.mark.asyncio
    async def test_start_page_and_params(self):
        client = FakeStoryblokClient(stories={"draft": [{"id": i} for i in range(10)]})

        result = await PaginatedFetcher(client).fetch_all(
            "draft", per_page=5, max_pages=1, start_page=2,
            extra_params={"content_type": "page"},
        )

        assert client.page_calls[0]["page"] == 2
        assert client.page_calls[0]["extra_params"] == {"content_type": "page"}
        assert [r["id"] for r in result.records] == [5, 6, 7, 8, 9]


class TestVersionMerger:
    """Tests for merge_versions."""

    @staticmethod
    def fetcher(results):
        async def fetch(version):
            return results[version]
        return fetch

    def test_merge_order(self):
        published = [{"id": 1, "v": "p"}, {"id": 2, "v": "p"}]
        draft = [{"id": 3, "v": "d"}, {"id": 1, "v": "d"}]

        merged = merge_records(published, draft)

        assert merged == [{"id": 1, "v": "d"}, {"id": 2, "v": "p"}, {"id": 3, "v": "d"}]

    def test_stories_without_id_are_kept(self):
        published = [{"name": "a"}, {"id": 1, "v": "p"}]
        draft = [{"name": "b"}, {"id": 1, "v": "d"}]

        merged = merge_records(published, draft)

        assert merged == [{"name": "a"}, {"id": 1, "v": "d"}, {"name": "b"}]

    @pytest.mark.asyncio
    async def test_draft_wins(self):
        results = {
            "draft": FetchResult("draft", records=[{"id": 1, "content": {"component": "b"}}], reported_total=1),
            "published": FetchResult("published", records=[{"id": 1, "content": {"component": "a"}}], reported_total=1),
        }

        merged = await merge_versions("both", self.fetcher(results))

        assert len(merged.records) == 1
        assert merged.records[0]["content"]["component"] == "b"

    @pytest.mark.asyncio
    async def test_total_is_draft_total(self):
        results = {
            "draft": FetchResult("draft", records=[{"id": 1}], reported_total=10),
            "published": FetchResult("published", records=[{"id": 1}], reported_total=8),
        }

        merged = await merge_versions("both", self.fetcher(results))

        assert merged.total_from_api == 10

    @pytest.mark.asyncio
    async def test_single_version(self):
        results = {"published": FetchResult("published", records=[{"id": 5}], reported_total=3)}

        merged = await merge_versions("published", self.fetcher(results))

        assert merged.records == [{"id": 5}]
        assert merged.total_from_api == 3
        assert list(merged.per_version) == ["published"]

    @pytest.mark.asyncio
    async def test_flags_aggregate_per_version(self):
        results = {
            "draft": FetchResult("draft", records=[{"id": 1}], reported_total=1),
            "published": FetchResult(
                "published", records=[{"id": 2}], reported_total=500,
                limit_reached=True, degraded=True, error="boom",
            ),
        }

        merged = await merge_versions("both", self.fetcher(results))

        assert merged.limit_reached is True
        assert merged.degraded is True
        assert merged.errors == {"published": "boom"}

    @pytest.mark.asyncio
    async def test_unknown_status(self):
        with pytest.raises(ValueError):
            await merge_versions("archived", self.fetcher({}))
