"""Notion Knowledge MCP Server.

Exposes a Notion-backed programming knowledge base to MCP clients.
"""

__version__ = "1.0.0"

SERVER_NAME = "notion-knowledge-mcp"
SERVER_DESCRIPTION = "Notion Knowledge Base MCP Server"
