"""ORM model for application users."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from api_boilerplate.infrastructure.database.base import BaseModel

NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 255


class User(BaseModel):
    """A registered user, unique by email."""

    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH), unique=True, nullable=False
    )

    def __repr__(self) -> str:
        """Return the user ID and email."""
        return f"<User(id={self.id}, email={self.email!r})>"
