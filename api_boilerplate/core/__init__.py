"""Core package for functionality shared by every layer.

- **config**: Settings loaded from the environment and ``.env``
- **context**: Request context and correlation ID management
- **exceptions**: AppError and its operational variants
- **error_context**: Sensitive data sanitization for safe logging
- **logging**: Loguru setup with console and JSON formatters
- **observability**: OpenTelemetry tracing setup
- **validation**: Declarative, schema-driven body validation
"""
