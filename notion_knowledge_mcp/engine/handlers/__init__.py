"""Tool handlers for the knowledge engine.

Each handler is a standalone async function that takes:
- params: the validated pydantic params model for the tool
- ctx: HandlerContext - Notion client and database property names

And returns:
- ToolResult with the rendered text and an error flag
"""

from .base import HandlerContext, HandlerFunc
from .knowledge import (
    build_page_properties,
    build_search_filter,
    handle_add_knowledge,
    handle_get_knowledge_stats,
    handle_get_recent_knowledge,
    handle_search_knowledge,
)

__all__ = [
    # Base
    "HandlerContext",
    "HandlerFunc",
    # Knowledge handlers
    "handle_add_knowledge",
    "handle_search_knowledge",
    "handle_get_recent_knowledge",
    "handle_get_knowledge_stats",
    "build_page_properties",
    "build_search_filter",
]
