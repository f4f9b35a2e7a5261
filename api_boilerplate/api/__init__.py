"""HTTP API layer built on FastAPI.

Key components:
- **main**: Application factory and lifecycle management
- **routes**: Static route table mounted under the API prefix
- **dependencies**: Request body validation dependency
- **middleware**: Correlation IDs, request logging and exception handlers
- **schemas**: The response envelope
- **utils**: orjson responses and the envelope builders

The API layer translates between HTTP and the services: routers parse and
validate input, services raise ``AppError`` for business failures and the
exception handlers turn every failure into one envelope.
"""
