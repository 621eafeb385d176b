"""Text rendering for knowledge tool results.

Pure functions: they take decoded records and return the multi-line text
sent back as MCP text content. Nothing here performs I/O or mutates its
input.
"""

from collections import Counter
from collections.abc import Iterable, Sequence

from ..models import AddKnowledgeParams, KnowledgeRecord

UNSET = "unset"
UNTITLED = "Untitled"


def _title(record: KnowledgeRecord) -> str:
    return record.title or UNTITLED


def _or_unset(value: str | None) -> str:
    return value or UNSET


def format_add_confirmation(params: AddKnowledgeParams, url: str) -> str:
    return "\n".join(
        [
            "Knowledge saved to Notion",
            f"Title: {params.title}",
            f"Project: {params.project}",
            f"Type: {params.type}",
            f"Link: {url}",
        ]
    )


def format_search_results(records: Sequence[KnowledgeRecord], query: str) -> str:
    """Render search hits in store order, with keywords where present."""
    if not records:
        return f'Search "{query}" found no matching results'

    lines = [f'Search "{query}" found {len(records)} result(s):', ""]
    for index, record in enumerate(records, start=1):
        lines.append(f"{index}. {_title(record)}")
        lines.append(
            f"   Project: {_or_unset(record.project)} | Type: {_or_unset(record.knowledge_type)}"
        )
        if record.keywords:
            lines.append(f"   Keywords: {', '.join(record.keywords)}")
        lines.append(f"   Link: {record.url}")
        lines.append("")
    return "\n".join(lines)


def format_recent_results(records: Sequence[KnowledgeRecord]) -> str:
    if not records:
        return "Recent knowledge entries: no results found"

    lines = [f"Recent knowledge entries ({len(records)}):", ""]
    for index, record in enumerate(records, start=1):
        lines.append(f"{index}. {_title(record)}")
        lines.append(f"   {_or_unset(record.project)} | {_or_unset(record.knowledge_type)}")
        lines.append(f"   {record.url}")
        lines.append("")
    return "\n".join(lines)


def count_by(values: Iterable[str]) -> list[tuple[str, int]]:
    """Frequency table sorted by descending count.

    Ties keep first-seen order: Counter preserves insertion order and
    sorted() is stable.
    """
    return sorted(Counter(values).items(), key=lambda item: item[1], reverse=True)


def format_stats(records: Sequence[KnowledgeRecord], truncated: bool = False) -> str:
    """Render project, type and language breakdowns of the given records.

    Records without a language are left out of the language table. When
    ``truncated`` is set the store holds more entries than were counted, and
    a closing note says so.
    """
    if not records:
        return "Knowledge base statistics: no data"

    by_project = count_by(_or_unset(r.project) for r in records)
    by_type = count_by(_or_unset(r.knowledge_type) for r in records)
    by_language = count_by(r.language for r in records if r.language)

    lines = [
        "Knowledge Base Statistics",
        "=" * 30,
        "",
        f"Total: {len(records)} entries",
        "",
        "By project:",
    ]
    lines.extend(f"  - {name}: {count}" for name, count in by_project)
    lines.append("")
    lines.append("By type:")
    lines.extend(f"  - {name}: {count}" for name, count in by_type)
    if by_language:
        lines.append("")
        lines.append("By language:")
        lines.extend(f"  - {name}: {count}" for name, count in by_language)
    if truncated:
        lines.append("")
        lines.append(f"Note: only the first {len(records)} entries were counted")
    return "\n".join(lines)


def format_downstream_error(action: str, error: Exception) -> str:
    """Describe a failed Notion call, e.g. ``Search failed: 404 - {...}``."""
    detail = str(error) or type(error).__name__
    return f"{action} failed: {detail}"
