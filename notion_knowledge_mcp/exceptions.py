"""Exception hierarchy for the knowledge server."""


class KnowledgeServerError(Exception):
    """Base class for all server errors."""


class ConfigurationError(KnowledgeServerError):
    """Required configuration is missing or invalid.

    Raised once at startup; the server refuses to handle requests until
    the configuration is fixed.
    """

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []


class NotionError(KnowledgeServerError):
    """Base class for failures talking to the Notion API."""


class NotionAPIError(NotionError):
    """Notion answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"{status_code} - {body}")
        self.status_code = status_code
        self.body = body


class NotionResponseError(NotionError):
    """Notion answered with a body that is not valid JSON."""


class ProtocolError(KnowledgeServerError):
    """A JSON-RPC request cannot be served; answered with an error envelope."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message
