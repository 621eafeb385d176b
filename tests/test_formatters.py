"""Tests for result text rendering."""

from notion_knowledge_mcp.engine.formatters import (
    count_by,
    format_add_confirmation,
    format_downstream_error,
    format_recent_results,
    format_search_results,
    format_stats,
)
from notion_knowledge_mcp.exceptions import NotionAPIError
from notion_knowledge_mcp.models import AddKnowledgeParams, KnowledgeRecord


def record(**kwargs) -> KnowledgeRecord:
    kwargs.setdefault("url", "https://www.notion.so/p")
    return KnowledgeRecord(**kwargs)


def test_search_result_lines():
    text = format_search_results(
        [
            record(
                title="Pandas groupby",
                project="數據分析",
                knowledge_type="代碼片段",
                keywords=["pandas", "python"],
                url="https://n.so/a",
            ),
        ],
        "pandas",
    )

    assert text.splitlines() == [
        'Search "pandas" found 1 result(s):',
        "",
        "1. Pandas groupby",
        "   Project: 數據分析 | Type: 代碼片段",
        "   Keywords: pandas, python",
        "   Link: https://n.so/a",
    ]


def test_search_placeholders_for_missing_fields():
    text = format_search_results([record()], "x")

    assert "1. Untitled" in text
    assert "Project: unset | Type: unset" in text
    assert "Keywords" not in text


def test_search_empty():
    assert format_search_results([], "go") == 'Search "go" found no matching results'


def test_recent_empty():
    assert "no results" in format_recent_results([])


def test_recent_numbering():
    text = format_recent_results([record(title="a"), record(title="b")])

    assert "1. a" in text
    assert "2. b" in text


def test_formatters_do_not_mutate_input():
    records = [record(title="b", project="P"), record(title="a", project="Q")]
    snapshot = [r.model_copy() for r in records]

    format_search_results(records, "a")
    format_recent_results(records)
    format_stats(records)

    assert records == snapshot


def test_count_by_orders_by_count_then_first_seen():
    assert count_by(["b", "a", "c", "a", "c"]) == [("a", 2), ("c", 2), ("b", 1)]


def test_stats_sections():
    records = [
        record(project="A", knowledge_type="T1", language="Go"),
        record(project="A", knowledge_type="T2"),
        record(project="B", knowledge_type="T2", language="Go"),
    ]

    lines = format_stats(records).splitlines()

    assert "Total: 3 entries" in lines
    project_start = lines.index("By project:")
    assert lines[project_start + 1 : project_start + 3] == ["  - A: 2", "  - B: 1"]
    type_start = lines.index("By type:")
    assert lines[type_start + 1 : type_start + 3] == ["  - T2: 2", "  - T1: 1"]
    language_start = lines.index("By language:")
    assert lines[language_start + 1 :] == ["  - Go: 2"]


def test_stats_without_languages_has_no_language_section():
    assert "By language:" not in format_stats([record(project="A")])


def test_stats_empty():
    assert format_stats([]) == "Knowledge base statistics: no data"


def test_add_confirmation():
    params = AddKnowledgeParams(title="Retry policy", content="...", project="DevOps工具")

    text = format_add_confirmation(params, "https://n.so/new")

    assert "Title: Retry policy" in text
    assert "Project: DevOps工具" in text
    assert "Type: 學習筆記" in text
    assert text.endswith("Link: https://n.so/new")


def test_downstream_error_embeds_status_and_body():
    text = format_downstream_error("Search", NotionAPIError(502, "Bad gateway"))
    assert text == "Search failed: 502 - Bad gateway"


def test_downstream_error_without_message():
    assert format_downstream_error("Save", TimeoutError()) == "Save failed: TimeoutError"
