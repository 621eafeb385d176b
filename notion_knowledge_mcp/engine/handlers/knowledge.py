"""Knowledge tool handlers.

Handles:
- add_knowledge: Create a knowledge page in the Notion database
- search_knowledge: Title substring search over recently edited pages
- get_recent_knowledge: List the most recently edited pages
- get_knowledge_stats: Project/type/language breakdown of the first 100 pages

Every handler makes a single Notion call. Notion errors, transport errors
and undecodable responses are caught here and returned as error results.
"""

import logging
from typing import Any

import httpx

from ...exceptions import NotionError
from ...models import (
    STATS_PAGE_SIZE,
    AddKnowledgeParams,
    KnowledgeStatsParams,
    Language,
    RecentKnowledgeParams,
    SearchKnowledgeParams,
    ToolResult,
    parse_query_response,
    parse_query_results,
)
from ..formatters import (
    format_add_confirmation,
    format_downstream_error,
    format_recent_results,
    format_search_results,
    format_stats,
)
from .base import HandlerContext

logger = logging.getLogger(__name__)

DOWNSTREAM_ERRORS = (NotionError, httpx.HTTPError)


def _failure(action: str, error: Exception) -> ToolResult:
    logger.warning(f"{action} failed: {type(error).__name__}: {error}")
    return ToolResult(text=format_downstream_error(action, error), is_error=True)


def _last_edited_desc(ctx: HandlerContext) -> list[dict[str, str]]:
    return [{"property": ctx.names.last_edited, "direction": "descending"}]


def build_page_properties(params: AddKnowledgeParams, ctx: HandlerContext) -> dict[str, Any]:
    """Build the Notion property map for a new knowledge page.

    Keywords, language and file path are left out entirely when empty.
    """
    names = ctx.names
    properties: dict[str, Any] = {
        names.title: {"title": [{"text": {"content": params.title}}]},
        names.project: {"select": {"name": params.project.value}},
        names.knowledge_type: {"select": {"name": params.type.value}},
        names.importance: {"select": {"name": params.importance.value}},
    }
    if params.keywords:
        properties[names.keywords] = {"multi_select": [{"name": kw} for kw in params.keywords]}
    if params.language is not Language.NONE:
        properties[names.language] = {"select": {"name": params.language.value}}
    if params.file_path:
        properties[names.file_path] = {"rich_text": [{"text": {"content": params.file_path}}]}
    return properties


def build_search_filter(params: SearchKnowledgeParams, ctx: HandlerContext) -> dict[str, Any] | None:
    """Equality filter on project and/or type; both are combined with ``and``."""
    filters = []
    if params.project_filter:
        filters.append(
            {"property": ctx.names.project, "select": {"equals": str(params.project_filter)}}
        )
    if params.type_filter:
        filters.append(
            {"property": ctx.names.knowledge_type, "select": {"equals": str(params.type_filter)}}
        )

    if not filters:
        return None
    if len(filters) == 1:
        return filters[0]
    return {"and": filters}


async def handle_add_knowledge(params: AddKnowledgeParams, ctx: HandlerContext) -> ToolResult:
    """Create a knowledge page.

    Args:
        params: Validated add_knowledge arguments
        ctx: Handler context

    Returns:
        ToolResult with a confirmation embedding the new page URL
    """
    children = [
        {
            "object": "block",
            "type": "paragraph",
            "paragraph": {"rich_text": [{"type": "text", "text": {"content": params.content}}]},
        }
    ]
    try:
        page = await ctx.client.create_page(build_page_properties(params, ctx), children)
    except DOWNSTREAM_ERRORS as e:
        return _failure("Save", e)

    logger.info(f"Created knowledge page {page.get('id', '')}")
    return ToolResult(text=format_add_confirmation(params, page.get("url", "")))


async def handle_search_knowledge(params: SearchKnowledgeParams, ctx: HandlerContext) -> ToolResult:
    """Search knowledge titles.

    Notion's database query has no full-text match, so this fetches up to
    ``limit`` (max 100) recently edited pages, optionally filtered by project
    and type, and keeps those whose title contains ``query``
    case-insensitively. Page content is not searched.
    """
    try:
        data = await ctx.client.query_database(
            filter=build_search_filter(params, ctx),
            sorts=_last_edited_desc(ctx),
            page_size=params.page_size,
        )
    except DOWNSTREAM_ERRORS as e:
        return _failure("Search", e)

    needle = params.query.lower()
    matches = [
        record
        for record in parse_query_results(data, ctx.names)
        if needle in (record.title or "").lower()
    ]
    return ToolResult(text=format_search_results(matches, params.query))


async def handle_get_recent_knowledge(
    params: RecentKnowledgeParams, ctx: HandlerContext
) -> ToolResult:
    """List the most recently edited entries (max 20)."""
    try:
        data = await ctx.client.query_database(
            sorts=_last_edited_desc(ctx),
            page_size=params.page_size,
        )
    except DOWNSTREAM_ERRORS as e:
        return _failure("Fetching recent knowledge", e)

    return ToolResult(text=format_recent_results(parse_query_results(data, ctx.names)))


async def handle_get_knowledge_stats(
    params: KnowledgeStatsParams, ctx: HandlerContext
) -> ToolResult:
    # First page only: databases above 100 entries are undercounted.
    try:
        data = await ctx.client.query_database(page_size=STATS_PAGE_SIZE)
    except DOWNSTREAM_ERRORS as e:
        return _failure("Fetching statistics", e)

    result = parse_query_response(data, ctx.names)
    return ToolResult(text=format_stats(result.records, truncated=result.has_more))
