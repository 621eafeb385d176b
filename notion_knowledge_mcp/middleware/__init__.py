"""ASGI middleware for the FastAPI application."""

from .request_id import RequestIdMiddleware

__all__ = ["RequestIdMiddleware"]
