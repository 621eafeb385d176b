"""Async client for the Notion REST API.

Only the two endpoints the knowledge tools need are wrapped: page creation
and database query. Each call makes exactly one HTTP request; there is no
retry.
"""

import logging
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import NotionAPIError, NotionResponseError

logger = logging.getLogger(__name__)


class NotionClient:
    """Talks to one Notion database with a fixed integration token.

    Args:
        settings: Loaded settings (token, database id, API URL, version).
        transport: Optional httpx transport, used by tests to stub Notion.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.database_id = settings.notion_database_id
        self.property_names = settings.property_names
        self._client = httpx.AsyncClient(
            base_url=settings.notion_api_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {settings.notion_token.get_secret_value()}",
                "Content-Type": "application/json",
                "Notion-Version": settings.notion_version,
            },
            timeout=settings.notion_timeout_seconds,
            transport=transport,
        )

    async def create_page(
        self, properties: dict[str, Any], children: list[dict[str, Any]] | None = None
    ) -> dict[str, Any]:
        """Create a page (record) in the configured database.

        Returns:
            The created page object; its ``url`` is the record permalink.
        """
        payload: dict[str, Any] = {
            "parent": {"database_id": self.database_id},
            "properties": properties,
        }
        if children:
            payload["children"] = children
        return await self._post("/pages", payload)

    async def query_database(
        self,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        page_size: int = 100,
    ) -> dict[str, Any]:
        """Query the configured database, returning the first page of results."""
        payload: dict[str, Any] = {"page_size": page_size}
        if filter:
            payload["filter"] = filter
        if sorts:
            payload["sorts"] = sorts
        return await self._post(f"/databases/{self.database_id}/query", payload)

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self._client.post(path, json=payload)

        if not response.is_success:
            logger.warning(f"Notion POST {path} failed with {response.status_code}")
            raise NotionAPIError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise NotionResponseError(f"Invalid JSON from Notion: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()
