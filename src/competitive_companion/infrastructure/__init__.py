"""Infrastructure layer: HTTP access and page parsers."""

from .http_client import AsyncHTTPClient

__all__ = ["AsyncHTTPClient"]
