"""Shared columns for published catalog entities."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column


class CatalogItemMixin:
    """Columns common to tours, activities and transfers."""

    # Primary key
    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    # Presentation
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration: Mapped[str | None] = mapped_column(String(100), nullable=True)
    featured_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    gallery: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Visibility flags
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        server_default=func.now(),
        index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )
