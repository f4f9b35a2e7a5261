"""Cross-cutting request/response concerns.

- **RequestContextMiddleware**: correlation IDs and request context
- **RequestLoggingMiddleware**: structured request logging with timing
- **error_handler**: the exception handlers producing failed envelopes

Middleware order (outermost first): request context, then request logging,
so every request log record already carries the correlation ID.
"""
