"""FastAPI dependency providing one database session per request.

The session is committed when the route finishes without raising and rolled
back otherwise, so a request is a single unit of work.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api_boilerplate.infrastructure.database.session import get_async_session


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Provide a database session for FastAPI dependency injection.

    Yields:
        AsyncSession: Session committed on success or rolled back on error.

    Example:
        @router.get("/")
        async def list_users(db: DatabaseSession): ...
    """
    async with get_async_session() as session:
        yield session


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
