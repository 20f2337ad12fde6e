"""Middleware modules"""

from oauth_server.middleware.logging import StructuredLoggingMiddleware

__all__ = ["StructuredLoggingMiddleware"]
