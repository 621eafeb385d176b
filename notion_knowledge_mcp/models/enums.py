"""Enumeration types for the Notion knowledge server.

Member values are the select options of the Notion knowledge database and
are sent to Notion verbatim.
"""

from enum import StrEnum


class ToolName(StrEnum):
    """Available knowledge tools."""

    ADD_KNOWLEDGE = "add_knowledge"
    SEARCH_KNOWLEDGE = "search_knowledge"
    GET_RECENT_KNOWLEDGE = "get_recent_knowledge"
    GET_KNOWLEDGE_STATS = "get_knowledge_stats"


class Project(StrEnum):
    """Project category of a knowledge entry."""

    WEB_APP = "Web應用"
    MOBILE_APP = "Mobile應用"
    BACKEND_API = "後端API"
    DEVOPS_TOOLS = "DevOps工具"
    DATA_ANALYSIS = "數據分析"
    OTHER = "其他"


class KnowledgeType(StrEnum):
    """Kind of knowledge captured."""

    CODE_SNIPPET = "代碼片段"
    SOLUTION = "解決方案"
    ERROR_LOG = "錯誤記錄"
    STUDY_NOTE = "學習筆記"
    CONFIG_FILE = "配置文件"
    BEST_PRACTICE = "最佳實踐"


class Importance(StrEnum):
    """Importance level of a knowledge entry."""

    HIGH = "高"
    MEDIUM = "中"
    LOW = "低"


class Language(StrEnum):
    """Programming language of a knowledge entry (NONE = not set)."""

    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"
    PYTHON = "Python"
    GO = "Go"
    RUST = "Rust"
    JAVA = "Java"
    HTML_CSS = "HTML/CSS"
    SQL = "SQL"
    SHELL = "Shell"
    NONE = ""
