"""Transfer (airport / ferry / island transport) model definition."""

from sqlalchemy import JSON, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .catalog import CatalogItemMixin


class Transfer(CatalogItemMixin, Base):
    """Point-to-point transfer with small and large group pricing."""

    __tablename__ = "transfers"

    transfer_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    route_from: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    route_to: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Minor units per vehicle
    price_small_group: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price_large_group: Mapped[int | None] = mapped_column(Integer, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    vehicle_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    max_passengers: Mapped[int | None] = mapped_column(Integer, nullable=True)
    features: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        CheckConstraint(
            "price_small_group IS NULL OR price_small_group >= 0",
            name="ck_transfer_price_small_non_negative"
        ),
        CheckConstraint(
            "price_large_group IS NULL OR price_large_group >= 0",
            name="ck_transfer_price_large_non_negative"
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<Transfer(id={self.id}, slug='{self.slug}', "
            f"route='{self.route_from} -> {self.route_to}')>"
        )
