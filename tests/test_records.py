"""Tests for defensive decoding of Notion pages into knowledge records."""

import pytest

from conftest import make_page
from notion_knowledge_mcp.models import KnowledgeRecord, parse_query_results


@pytest.fixture
def names(settings):
    return settings.property_names


def test_full_page(names):
    page = make_page(
        "Title",
        project="Web應用",
        knowledge_type="解決方案",
        keywords=["a", "b"],
        language="Rust",
        url="https://n.so/x",
    )
    page["properties"]["檔案路徑"] = {"rich_text": [{"plain_text": "src/"}, {"plain_text": "x.rs"}]}
    page["properties"]["重要程度"] = {"select": {"name": "高"}}

    rec = KnowledgeRecord.from_page(page, names)

    assert rec.title == "Title"
    assert rec.project == "Web應用"
    assert rec.knowledge_type == "解決方案"
    assert rec.importance == "高"
    assert rec.keywords == ["a", "b"]
    assert rec.language == "Rust"
    assert rec.file_path == "src/x.rs"
    assert rec.url == "https://n.so/x"
    assert rec.last_edited_time == "2024-01-01T00:00:00.000Z"


def test_title_from_text_content_when_plain_text_missing(names):
    page = {"properties": {"標題": {"title": [{"text": {"content": "Only text"}}]}}}
    assert KnowledgeRecord.from_page(page, names).title == "Only text"


def test_multi_segment_title_is_joined(names):
    page = {"properties": {"標題": {"title": [{"plain_text": "Part "}, {"plain_text": "two"}]}}}
    assert KnowledgeRecord.from_page(page, names).title == "Part two"


@pytest.mark.parametrize(
    "properties",
    [
        {},
        {"標題": None, "專案名稱": None},
        {"標題": {"title": []}, "專案名稱": {"select": None}},
        {"標題": "oops", "專案名稱": ["x"], "關鍵字": {"multi_select": "nope"}},
        {"標題": {"title": [{"plain_text": 5}]}, "專案名稱": {"select": {"name": None}}},
    ],
)
def test_malformed_properties_fall_back(names, properties):
    rec = KnowledgeRecord.from_page({"url": "u", "properties": properties}, names)

    assert rec.title is None
    assert rec.project is None
    assert rec.keywords == []
    assert rec.language is None


@pytest.mark.parametrize("page", [None, "page", 3, {"properties": "bad"}])
def test_malformed_page_falls_back(names, page):
    rec = KnowledgeRecord.from_page(page, names)
    assert rec == KnowledgeRecord()


def test_parse_query_results_keeps_order(names):
    data = {"results": [make_page("one"), make_page("two"), make_page("three")]}
    assert [r.title for r in parse_query_results(data, names)] == ["one", "two", "three"]


@pytest.mark.parametrize("data", [{}, {"results": None}, [], "x"])
def test_parse_query_results_without_results(names, data):
    assert parse_query_results(data, names) == []


def test_custom_property_names(settings):
    names = settings.model_copy(update={"notion_prop_title": "Name"}).property_names
    page = {"properties": {"Name": {"title": [{"plain_text": "Renamed"}]}}}

    assert KnowledgeRecord.from_page(page, names).title == "Renamed"
