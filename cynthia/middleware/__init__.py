"""HTTP middleware for the Cynthia page server."""

from .logging import RequestIdFilter, StructuredFormatter, StructuredLoggingMiddleware, setup_structured_logging

__all__ = ["RequestIdFilter", "StructuredFormatter", "StructuredLoggingMiddleware", "setup_structured_logging"]
