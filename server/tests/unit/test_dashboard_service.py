"""Unit tests for the back-office dashboard."""

import pytest

from voyage.schemas.catalog import CreateActivityRequest, CreateTourRequest, CreateTransferRequest
from voyage.services.catalog_service import ActivityService, TourService, TransferService
from voyage.services.dashboard_service import DashboardService


@pytest.mark.asyncio
async def test_empty_dashboard(test_session):
    """An empty database gives zeros everywhere."""
    stats = await DashboardService(test_session).get_stats()

    assert stats.total_tours == 0
    assert stats.published_tours == 0
    assert stats.total_bookings == 0
    assert stats.pending_bookings == 0
    assert stats.total_revenue == []


@pytest.mark.asyncio
async def test_dashboard_counts(test_session, stored_booking):
    """Counts split published items and sum known booking totals."""
    tours = TourService(test_session)
    await tours.create(CreateTourRequest(title="Serengeti Safari", is_published=True))
    await tours.create(CreateTourRequest(title="Draft Safari"))
    await ActivityService(test_session).create(CreateActivityRequest(title="Safari Blue", is_published=True))
    await TransferService(test_session).create(CreateTransferRequest(
        title="Airport to Nungwi", route_from="Zanzibar Airport", route_to="Nungwi",
    ))

    await stored_booking("IV-DSH001", total_price=50000)
    await stored_booking("IV-DSH002", status="confirmed", total_price=120000)
    await stored_booking("IV-DSH003", status="pending")

    stats = await DashboardService(test_session).get_stats()

    assert (stats.total_tours, stats.published_tours) == (2, 1)
    assert (stats.total_activities, stats.published_activities) == (1, 1)
    assert (stats.total_transfers, stats.published_transfers) == (1, 0)
    assert stats.total_bookings == 3
    assert stats.pending_bookings == 2
    assert [(m.amount, m.currency) for m in stats.total_revenue] == [(170000, "USD")]


@pytest.mark.asyncio
async def test_revenue_split_by_currency(test_session, stored_booking):
    """Totals in different currencies are never added together."""
    await stored_booking("IV-CUR001", total_price=90000)
    await stored_booking("IV-CUR002", total_price=45000, currency="EUR")
    await stored_booking("IV-CUR003", total_price=15000, currency="EUR")
    await stored_booking("IV-CUR004", currency="GBP")

    stats = await DashboardService(test_session).get_stats()

    assert [(m.amount, m.currency) for m in stats.total_revenue] == [(60000, "EUR"), (90000, "USD")]
