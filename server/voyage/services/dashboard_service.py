"""Back-office dashboard figures."""

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.activity import Activity
from ..models.booking import Booking, BookingStatus
from ..models.tour import Tour
from ..models.transfer import Transfer
from ..schemas.common import Money
from ..schemas.dashboard import DashboardStats


class DashboardService:
    """Aggregates catalog and booking counts in the database."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _catalog_counts(self, model) -> tuple[int, int]:
        stmt = select(
            func.count(model.id),
            func.coalesce(func.sum(case((model.is_published.is_(True), 1), else_=0)), 0),
        )
        total, published = (await self.db.execute(stmt)).one()
        return int(total), int(published)

    async def get_stats(self) -> DashboardStats:
        total_tours, published_tours = await self._catalog_counts(Tour)
        total_activities, published_activities = await self._catalog_counts(Activity)
        total_transfers, published_transfers = await self._catalog_counts(Transfer)

        stmt = select(
            func.count(Booking.id),
            func.coalesce(func.sum(case((Booking.status == BookingStatus.PENDING.value, 1), else_=0)), 0),
        )
        total_bookings, pending_bookings = (await self.db.execute(stmt)).one()

        revenue_stmt = (
            select(Booking.currency, func.sum(Booking.total_price))
            .where(Booking.total_price.is_not(None))
            .group_by(Booking.currency)
            .order_by(Booking.currency)
        )
        revenue = [
            Money(amount=int(amount), currency=currency)
            for currency, amount in (await self.db.execute(revenue_stmt)).all()
        ]

        return DashboardStats(
            total_tours=total_tours,
            published_tours=published_tours,
            total_activities=total_activities,
            published_activities=published_activities,
            total_transfers=total_transfers,
            published_transfers=published_transfers,
            total_bookings=int(total_bookings),
            pending_bookings=int(pending_bookings),
            total_revenue=revenue,
        )
