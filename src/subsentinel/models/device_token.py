"""Push-notification device registrations."""
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from subsentinel.models.base import BaseModel


class DeviceToken(BaseModel):
    """An FCM token. A token belongs to at most one user at a time."""

    __tablename__ = "device_tokens"

    token: Mapped[str] = mapped_column(String(512), unique=True, nullable=False, index=True)
    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    platform: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        return f"<DeviceToken(id={self.id}, platform={self.platform}, user_id={self.user_id})>"
