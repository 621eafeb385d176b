"""Base infrastructure for tool handlers.

Each handler receives its validated params model and a HandlerContext and
returns a ToolResult. Handlers never raise for downstream failures; those
are rendered as error results.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Coroutine

if TYPE_CHECKING:
    from ...config import PropertyNames
    from ...models import ToolResult
    from ...notion import NotionClient


@dataclass
class HandlerContext:
    """Context object passed to all handlers.

    Holds the read-only dependencies a handler needs; there is no
    per-session state.
    """

    # Notion API client bound to the knowledge database
    client: "NotionClient"

    # Database property names used to build and read records
    names: "PropertyNames"


# Type alias for handler functions
HandlerFunc = Callable[
    [Any, HandlerContext],
    Coroutine[Any, Any, "ToolResult"],
]
