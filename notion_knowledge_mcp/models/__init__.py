"""Pydantic models for the Notion knowledge server.

This module re-exports all models. Import from submodules directly for
cleaner imports:

    from notion_knowledge_mcp.models.enums import ToolName, Project
    from notion_knowledge_mcp.models.records import KnowledgeRecord
"""

# ============ ENUMS ============
from .enums import Importance, KnowledgeType, Language, Project, ToolName

# ============ RECORD MODELS ============
from .records import (
    KnowledgeRecord,
    MultiSelectProperty,
    NotionPage,
    QueryResponse,
    QueryResult,
    RichTextProperty,
    SelectProperty,
    TitleProperty,
    parse_query_response,
    parse_query_results,
)

# ============ REQUEST MODELS ============
from .requests import (
    RECENT_MAX_PAGE_SIZE,
    SEARCH_MAX_PAGE_SIZE,
    STATS_PAGE_SIZE,
    AddKnowledgeParams,
    KnowledgeStatsParams,
    RecentKnowledgeParams,
    SearchKnowledgeParams,
    ToolParams,
)

# ============ RESULT MODELS ============
from .results import HealthResponse, LegacyCallRequest, LegacyCallResponse, ToolResult

__all__ = [
    # Enums
    "ToolName",
    "Project",
    "KnowledgeType",
    "Importance",
    "Language",
    # Records
    "KnowledgeRecord",
    "NotionPage",
    "QueryResponse",
    "QueryResult",
    "TitleProperty",
    "SelectProperty",
    "MultiSelectProperty",
    "RichTextProperty",
    "parse_query_response",
    "parse_query_results",
    # Requests
    "ToolParams",
    "AddKnowledgeParams",
    "SearchKnowledgeParams",
    "RecentKnowledgeParams",
    "KnowledgeStatsParams",
    "SEARCH_MAX_PAGE_SIZE",
    "RECENT_MAX_PAGE_SIZE",
    "STATS_PAGE_SIZE",
    # Results
    "ToolResult",
    "HealthResponse",
    "LegacyCallRequest",
    "LegacyCallResponse",
]
