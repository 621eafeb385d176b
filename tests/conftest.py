"""Shared fixtures: settings, a stubbed Notion API and a dispatcher wired to it."""

import json
from typing import Any

import httpx
import pytest

from notion_knowledge_mcp.config import Settings
from notion_knowledge_mcp.engine.handlers import HandlerContext
from notion_knowledge_mcp.mcp import MCPDispatcher
from notion_knowledge_mcp.notion import NotionClient

DATABASE_ID = "db-123"
TOKEN = "secret_test_token"


class NotionStub:
    """Stands in for api.notion.com and records every request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"results": [], "has_more": False}
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        if isinstance(self.body, bytes):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]

    def reply_with_pages(self, *pages: dict) -> None:
        self.body = {"object": "list", "results": list(pages), "has_more": False}


def make_page(
    title: str | None = "Untitled page",
    project: str | None = None,
    knowledge_type: str | None = None,
    keywords: list[str] | None = None,
    language: str | None = None,
    url: str = "https://www.notion.so/page",
) -> dict:
    """Build a Notion page object shaped like a database query result."""
    properties: dict[str, Any] = {
        "標題": {
            "type": "title",
            "title": (
                [{"type": "text", "text": {"content": title}, "plain_text": title}]
                if title is not None
                else []
            ),
        },
        "專案名稱": {"type": "select", "select": {"name": project} if project else None},
        "知識類型": {
            "type": "select",
            "select": {"name": knowledge_type} if knowledge_type else None,
        },
        "關鍵字": {
            "type": "multi_select",
            "multi_select": [{"name": k} for k in keywords or []],
        },
        "程式語言": {"type": "select", "select": {"name": language} if language else None},
    }
    return {
        "object": "page",
        "id": "page-id",
        "url": url,
        "last_edited_time": "2024-01-01T00:00:00.000Z",
        "properties": properties,
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(notion_token=TOKEN, notion_database_id=DATABASE_ID, _env_file=None)


@pytest.fixture
def notion() -> NotionStub:
    return NotionStub()


@pytest.fixture
def client(settings, notion) -> NotionClient:
    return NotionClient(settings, transport=notion.transport)


@pytest.fixture
def ctx(client, settings) -> HandlerContext:
    return HandlerContext(client=client, names=settings.property_names)


@pytest.fixture
def dispatcher(client) -> MCPDispatcher:
    return MCPDispatcher(client)
