"""Database access layer on SQLAlchemy 2.0 async.

- **base**: Declarative base and common model fields
- **session**: Async engine, session management and schema sync
- **repository**: Generic repository with CRUD operations
- **dependencies**: FastAPI dependency injection helpers
"""

from api_boilerplate.infrastructure.database.base import Base, BaseModel
from api_boilerplate.infrastructure.database.dependencies import (
    DatabaseSession,
    get_db,
)
from api_boilerplate.infrastructure.database.repository import BaseRepository
from api_boilerplate.infrastructure.database.session import (
    check_database_connection,
    close_database,
    create_database_engine,
    create_schema,
    get_async_session,
    get_engine,
    get_session_factory,
)

__all__ = [
    "Base",
    "BaseModel",
    "BaseRepository",
    "DatabaseSession",
    "check_database_connection",
    "close_database",
    "create_database_engine",
    "create_schema",
    "get_async_session",
    "get_db",
    "get_engine",
    "get_session_factory",
]
