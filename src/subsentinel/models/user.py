"""User model: the identity anchor for all user-owned data."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from subsentinel.models.base import BaseModel


class User(BaseModel):
    """A mobile user identified by phone number or identity-provider account."""

    __tablename__ = "users"

    phone: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True, index=True)
    google_id: Mapped[str | None] = mapped_column(
        String(128), unique=True, nullable=True, index=True
    )
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True, index=True)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, phone={self.phone}, google_id={self.google_id})>"
