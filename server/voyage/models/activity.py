"""Activity (Zanzibar excursion) model definition."""

from sqlalchemy import JSON, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .catalog import CatalogItemMixin


class Activity(CatalogItemMixin, Base):
    """Day trip or excursion."""

    __tablename__ = "activities"

    price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)

    included: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    excluded: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        CheckConstraint("price IS NULL OR price >= 0", name="ck_activity_price_non_negative"),
        CheckConstraint("length(slug) > 0", name="ck_activity_slug_not_empty"),
    )

    def __repr__(self) -> str:
        return f"<Activity(id={self.id}, title='{self.title}', slug='{self.slug}')>"
