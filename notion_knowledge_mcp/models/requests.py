"""Request models (Pydantic *Params classes) for the knowledge tools.

Field defaults mirror the ``default`` entries of the tool input schemas in
``mcp/tool_defs.py``; validation happens before any call to Notion.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .enums import Importance, KnowledgeType, Language, Project

SEARCH_MAX_PAGE_SIZE = 100
RECENT_MAX_PAGE_SIZE = 20
STATS_PAGE_SIZE = 100


class ToolParams(BaseModel):
    """Base for tool parameter models. Unknown arguments are ignored."""

    model_config = ConfigDict(extra="ignore")


class AddKnowledgeParams(ToolParams):
    """Parameters for add_knowledge tool."""

    title: str = Field(..., description="Knowledge entry title")
    content: str = Field(..., description="Entry body, Markdown supported")
    project: Project = Field(default=Project.OTHER, description="Project category")
    type: KnowledgeType = Field(default=KnowledgeType.STUDY_NOTE, description="Knowledge type")
    keywords: list[str] = Field(default_factory=list, description="Keyword tags")
    language: Language = Field(default=Language.NONE, description="Programming language")
    importance: Importance = Field(default=Importance.MEDIUM, description="Importance level")
    file_path: str = Field(default="", description="Related file path")


class SearchKnowledgeParams(ToolParams):
    """Parameters for search_knowledge tool."""

    query: str = Field(..., description="Substring to look for in titles")
    project_filter: Project | Literal[""] = Field(default="", description="Filter by project")
    type_filter: KnowledgeType | Literal[""] = Field(default="", description="Filter by type")
    limit: int = Field(default=10, description="Maximum records to fetch")

    @property
    def page_size(self) -> int:
        return max(1, min(self.limit, SEARCH_MAX_PAGE_SIZE))


class RecentKnowledgeParams(ToolParams):
    """Parameters for get_recent_knowledge tool."""

    limit: int = Field(default=5, description="Number of entries to return")

    @property
    def page_size(self) -> int:
        return max(1, min(self.limit, RECENT_MAX_PAGE_SIZE))


class KnowledgeStatsParams(ToolParams):
    """Parameters for get_knowledge_stats tool (takes none)."""
