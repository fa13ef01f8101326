"""Tour (safari package) model definition."""

from sqlalchemy import JSON, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .catalog import CatalogItemMixin


class Tour(CatalogItemMixin, Base):
    """Multi-day safari or climbing package."""

    __tablename__ = "tours"

    # Pricing (minor units, per person)
    price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    difficulty: Mapped[str | None] = mapped_column(String(50), nullable=True)
    max_group_size: Mapped[int | None] = mapped_column(Integer, nullable=True)

    included: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    excluded: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    # [{"day": 1, "title": ..., "description": ..., "activities": [...]}]
    itinerary: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        CheckConstraint("price IS NULL OR price >= 0", name="ck_tour_price_non_negative"),
        CheckConstraint("length(slug) > 0", name="ck_tour_slug_not_empty"),
    )

    def __repr__(self) -> str:
        return f"<Tour(id={self.id}, title='{self.title}', slug='{self.slug}')>"
