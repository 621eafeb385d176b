"""Notion REST API access."""

from .client import NotionClient

__all__ = ["NotionClient"]
