"""Data access for users."""

from sqlalchemy.ext.asyncio import AsyncSession

from api_boilerplate.infrastructure.database.repository import BaseRepository
from api_boilerplate.users.models import User


class UserRepository(BaseRepository[User]):
    """Repository for the ``users`` table."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def find_by_email(self, email: str) -> User | None:
        """Return the user registered with ``email``, if any."""
        return await self.find_one_by(email=email)
