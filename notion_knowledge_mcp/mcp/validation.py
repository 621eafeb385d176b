"""Tool argument validation for MCP transport.

Arguments of a tools/call request are validated against the tool's params
model before the handler runs. Omitted optional arguments receive their
schema defaults; missing required arguments or values outside a declared
enumeration are rejected without touching Notion.
"""

from typing import Any

from pydantic import ValidationError

from ..models import (
    AddKnowledgeParams,
    KnowledgeStatsParams,
    RecentKnowledgeParams,
    SearchKnowledgeParams,
    ToolName,
    ToolParams,
)

PARAMS_MODELS: dict[ToolName, type[ToolParams]] = {
    ToolName.ADD_KNOWLEDGE: AddKnowledgeParams,
    ToolName.SEARCH_KNOWLEDGE: SearchKnowledgeParams,
    ToolName.GET_RECENT_KNOWLEDGE: RecentKnowledgeParams,
    ToolName.GET_KNOWLEDGE_STATS: KnowledgeStatsParams,
}


class ToolArgumentError(ValueError):
    """Tool arguments failed validation."""


def _describe(error: ValidationError) -> str:
    missing: list[str] = []
    invalid: dict[str, str] = {}
    for item in error.errors():
        # Union members add a suffix to loc; report the top-level argument only.
        field = str(item["loc"][0]) if item["loc"] else "arguments"
        if item["type"] == "missing":
            missing.append(field)
        else:
            invalid.setdefault(field, item["msg"])

    parts = []
    if missing:
        parts.append(f"missing required argument(s): {', '.join(missing)}")
    if invalid:
        details = "; ".join(f"{field} ({msg})" for field, msg in invalid.items())
        parts.append(f"invalid argument(s): {details}")
    return "; ".join(parts)


def validate_tool_arguments(tool: ToolName, arguments: dict[str, Any]) -> ToolParams:
    """Validate and default the arguments of a tool call.

    Args:
        tool: Registered tool name
        arguments: Raw ``params.arguments`` mapping

    Returns:
        The populated params model

    Raises:
        ToolArgumentError: If a required argument is missing or a value is invalid
    """
    try:
        return PARAMS_MODELS[tool].model_validate(arguments)
    except ValidationError as e:
        raise ToolArgumentError(f"{tool}: {_describe(e)}") from e
