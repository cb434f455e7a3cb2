"""Per-user onboarding and budget preferences."""
import enum
from uuid import UUID

from sqlalchemy import JSON, Boolean, Enum, Float, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from subsentinel.models.base import BaseModel


class SpendingAwareness(str, enum.Enum):
    KNOW = "know"
    UNSURE = "unsure"
    NO_IDEA = "no_idea"


class AlertTiming(str, enum.Enum):
    DAY = "24h"
    THREE_DAYS = "3d"
    WEEK = "1w"


def _enum_values(e: type[enum.Enum]) -> list[str]:
    return [m.value for m in e]


class UserPreferences(BaseModel):
    """One preferences record per user (unique ``user_id``)."""

    __tablename__ = "user_preferences"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )
    budget: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    spending_awareness: Mapped[SpendingAwareness] = mapped_column(
        Enum(SpendingAwareness, name="spending_awareness", values_callable=_enum_values),
        default=SpendingAwareness.UNSURE,
        nullable=False,
    )
    # Category ids as strings; stale ids are tolerated when a category is deleted.
    categories: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    pain_points: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    goals: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    alert_timing: Mapped[AlertTiming] = mapped_column(
        Enum(AlertTiming, name="alert_timing", values_callable=_enum_values),
        default=AlertTiming.DAY,
        nullable=False,
    )
    onboarding_complete: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<UserPreferences(user_id={self.user_id}, budget={self.budget}, "
            f"onboarding_complete={self.onboarding_complete})>"
        )
