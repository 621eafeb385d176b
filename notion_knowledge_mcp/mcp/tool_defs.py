"""MCP Tool Definitions for the Notion knowledge server.

This module contains the tool definitions returned by the tools/list method.
Each tool definition includes the schema for its input parameters.

Tools:
    - add_knowledge: Save a new entry to the knowledge base
    - search_knowledge: Title search with optional project/type filters
    - get_recent_knowledge: Most recently edited entries
    - get_knowledge_stats: Breakdown by project, type and language

Defaults declared here must match the params models in models/requests.py.
"""

from ..models import Importance, KnowledgeType, Language, Project, ToolName

PROJECT_OPTIONS = [p.value for p in Project]
TYPE_OPTIONS = [t.value for t in KnowledgeType]

TOOL_DEFINITIONS: list[dict] = [
    {
        "name": ToolName.ADD_KNOWLEDGE.value,
        "description": "Add a new entry to the programming knowledge base.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "title": {"type": "string", "description": "Knowledge entry title"},
                "content": {
                    "type": "string",
                    "description": "Detailed content, Markdown supported",
                },
                "project": {
                    "type": "string",
                    "description": "Project category",
                    "enum": PROJECT_OPTIONS,
                    "default": Project.OTHER.value,
                },
                "type": {
                    "type": "string",
                    "description": "Knowledge type",
                    "enum": TYPE_OPTIONS,
                    "default": KnowledgeType.STUDY_NOTE.value,
                },
                "keywords": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Keyword tags",
                    "default": [],
                },
                "language": {
                    "type": "string",
                    "description": "Programming language",
                    "enum": [lang.value for lang in Language],
                    "default": Language.NONE.value,
                },
                "importance": {
                    "type": "string",
                    "description": "Importance level",
                    "enum": [i.value for i in Importance],
                    "default": Importance.MEDIUM.value,
                },
                "file_path": {
                    "type": "string",
                    "description": "Related file path (optional)",
                    "default": "",
                },
            },
            "required": ["title", "content"],
        },
    },
    {
        "name": ToolName.SEARCH_KNOWLEDGE.value,
        "description": (
            "Search the knowledge base. Matches the query as a case-insensitive "
            "substring of entry titles among the most recently edited entries."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search keyword"},
                "project_filter": {
                    "type": "string",
                    "description": "Filter by project",
                    "enum": ["", *PROJECT_OPTIONS],
                    "default": "",
                },
                "type_filter": {
                    "type": "string",
                    "description": "Filter by knowledge type",
                    "enum": ["", *TYPE_OPTIONS],
                    "default": "",
                },
                "limit": {
                    "type": "integer",
                    "description": "Number of entries to scan (max 100)",
                    "default": 10,
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": ToolName.GET_RECENT_KNOWLEDGE.value,
        "description": "Get the most recently edited knowledge entries.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "limit": {
                    "type": "integer",
                    "description": "Number of entries to return (max 20)",
                    "default": 5,
                },
            },
        },
    },
    {
        "name": ToolName.GET_KNOWLEDGE_STATS.value,
        "description": "Get knowledge base statistics by project, type and language.",
        "inputSchema": {"type": "object", "properties": {}},
    },
]
