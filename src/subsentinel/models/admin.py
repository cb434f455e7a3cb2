"""Admin operator accounts, separate from mobile users."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from subsentinel.models.base import BaseModel


class Admin(BaseModel):
    __tablename__ = "admins"

    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Admin(id={self.id}, username={self.username})>"
