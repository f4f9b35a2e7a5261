"""Business rules for managing users.

Email addresses are unique: both create and update check for an existing
owner first, and a unique-constraint violation raised by the database while
flushing is reported the same way, for requests racing each other.
"""

from typing import Annotated

from fastapi import Depends
from loguru import logger
from sqlalchemy.exc import IntegrityError

from api_boilerplate.core.exceptions import ConflictError
from api_boilerplate.infrastructure.database.dependencies import DatabaseSession
from api_boilerplate.users.models import User
from api_boilerplate.users.repository import UserRepository
from api_boilerplate.users.schemas import UserCreate, UserUpdate

EMAIL_TAKEN_MESSAGE = "User with this email already exists"


class UsersService:
    """CRUD operations on users.

    Args:
        repository: Data access for the ``users`` table.
    """

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def list_users(self) -> list[User]:
        """Return every user, ordered by ID."""
        return await self.repository.get_all()

    async def get_user(self, user_id: int) -> User | None:
        """Return the user with ``user_id``, or None when there is none."""
        return await self.repository.get_by_id(user_id)

    async def _ensure_email_available(self, email: str) -> None:
        if await self.repository.find_by_email(email) is not None:
            logger.info("Rejected duplicate email for user write")
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

    async def create_user(self, data: UserCreate) -> User:
        """Register a new user.

        Args:
            data: Validated user fields.

        Returns:
            User: The persisted user with its generated ID.

        Raises:
            ConflictError: If the email is already registered.
        """
        await self._ensure_email_available(data.email)

        user = User(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
        )
        try:
            return await self.repository.create(user)
        except IntegrityError as e:
            raise ConflictError(EMAIL_TAKEN_MESSAGE) from e

    async def update_user(self, user_id: int, data: UserUpdate) -> User | None:
        """Apply the provided, non-empty fields of ``data`` to a user.

        Args:
            user_id: ID of the user to change.
            data: Fields to change.

        Returns:
            User | None: The updated user, or None when it does not exist.

        Raises:
            ConflictError: If the new email belongs to another user.
        """
        user = await self.repository.get_by_id(user_id)
        if user is None:
            return None

        changes = data.changes()
        new_email = changes.get("email")
        if new_email is not None and new_email != user.email:
            await self._ensure_email_available(new_email)

        try:
            return await self.repository.save(user, changes)
        except IntegrityError as e:
            raise ConflictError(EMAIL_TAKEN_MESSAGE) from e

    async def delete_user(self, user_id: int) -> bool:
        """Delete a user.

        Returns:
            bool: True if the user existed and was removed.
        """
        return await self.repository.delete(user_id)


def get_users_service(db: DatabaseSession) -> UsersService:
    """Build the service for the current request's database session."""
    return UsersService(UserRepository(db))


UsersServiceDep = Annotated[UsersService, Depends(get_users_service)]
