"""Generic repository with the async CRUD primitives services build on."""

from collections.abc import Mapping

from loguru import logger
from sqlalchemy import delete as sql_delete
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api_boilerplate.infrastructure.database.base import BaseModel


class BaseRepository[T: BaseModel]:
    """Async find/create/save/delete operations for one model class.

    Args:
        session: The async SQLAlchemy session to use for operations.
        model_class: The SQLAlchemy model class this repository manages.

    Example:
        class UserRepository(BaseRepository[User]):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__(session, User)
    """

    def __init__(self, session: AsyncSession, model_class: type[T]) -> None:
        self.session = session
        self.model_class = model_class

    async def get_by_id(self, entity_id: int) -> T | None:
        """Retrieve a model instance by its ID.

        Args:
            entity_id: The primary key ID of the model to retrieve.

        Returns:
            T | None: The model instance if found, None otherwise.
        """
        logger.debug("Fetching {} by ID: {}", self.model_class.__name__, entity_id)
        stmt = select(self.model_class).where(self.model_class.id == entity_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int | None = None) -> list[T]:
        """Retrieve model instances ordered by ID ascending.

        Args:
            skip: Number of records to skip.
            limit: Maximum number of records to return, None for all.

        Returns:
            list[T]: List of model instances.
        """
        stmt = select(self.model_class).order_by(self.model_class.id).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        instances = list(result.scalars().all())
        logger.debug(
            "Retrieved {} {} instances", len(instances), self.model_class.__name__
        )
        return instances

    async def find_one_by(self, **kwargs: object) -> T | None:
        """Find the first model instance matching every given column value.

        Args:
            **kwargs: Column-value pairs to filter by.

        Returns:
            T | None: The first matching instance if found, None otherwise.

        Raises:
            AttributeError: If a keyword does not name a model attribute.
        """
        stmt = select(self.model_class)
        for field, value in kwargs.items():
            stmt = stmt.where(getattr(self.model_class, field) == value)
        stmt = stmt.order_by(self.model_class.id).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, obj: T) -> T:
        """Persist a new instance.

        Args:
            obj: The model instance to create.

        Returns:
            T: The created instance with its generated ID and timestamps.
        """
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj)
        logger.info("Created {} instance with ID: {}", self.model_class.__name__, obj.id)
        return obj

    async def save(self, obj: T, data: Mapping[str, object]) -> T:
        """Apply ``data`` to an existing instance and flush it.

        Args:
            obj: A persistent instance loaded through this session.
            data: Attribute values to set.

        Returns:
            T: The refreshed instance.
        """
        for key, value in data.items():
            if hasattr(obj, key):
                setattr(obj, key, value)
            else:
                logger.warning(
                    "Attempted to update non-existent field '{}' on {}",
                    key,
                    self.model_class.__name__,
                )

        await self.session.flush()
        await self.session.refresh(obj)
        logger.info(
            "Updated {} instance ID {} - fields: {}",
            self.model_class.__name__,
            obj.id,
            list(data.keys()),
        )
        return obj

    async def delete(self, entity_id: int) -> bool:
        """Delete a model instance by its ID.

        Args:
            entity_id: The primary key ID of the model to delete.

        Returns:
            bool: True if a row was deleted, False if none matched.
        """
        stmt = sql_delete(self.model_class).where(self.model_class.id == entity_id)
        result = await self.session.execute(stmt)
        deleted = result.rowcount > 0

        if deleted:
            logger.info(
                "Deleted {} instance with ID: {}", self.model_class.__name__, entity_id
            )
        return deleted
