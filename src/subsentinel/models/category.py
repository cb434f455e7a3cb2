"""Spending categories: global defaults plus user-owned custom entries."""
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from subsentinel.models.base import BaseModel


class Category(BaseModel):
    """A named spending classification.

    Defaults carry ``user_id = NULL``. Names are unique per owner, and unique
    among defaults through a partial index (NULLs never collide in a plain
    unique constraint).
    """

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    icon: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str] = mapped_column(String(32), nullable=False)
    logo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )

    __table_args__ = (
        UniqueConstraint("name", "user_id", name="uq_categories_name_user"),
        Index(
            "uq_categories_default_name",
            "name",
            unique=True,
            postgresql_where=text("user_id IS NULL"),
            sqlite_where=text("user_id IS NULL"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name}, is_default={self.is_default})>"
