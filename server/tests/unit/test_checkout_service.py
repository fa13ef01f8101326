"""Unit tests for cart checkout."""

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from voyage.core.exceptions import NotFoundError, ValidationError
from voyage.models import Booking
from voyage.schemas.booking import CartItem, CartLinkRequest, CheckoutRequest
from voyage.schemas.catalog import CreateActivityRequest, CreateTourRequest
from voyage.services.catalog_service import ActivityService, TourService
from voyage.services.checkout_service import CheckoutService


@pytest.fixture
def checkout_data(future_date):
    return {
        "customer_name": "Jonas Lindqvist",
        "customer_email": "jonas.lindqvist@outlook.com",
        "customer_phone": "+46 70 123 45 67",
        "travel_date": future_date,
        "number_of_guests": 2,
    }


async def _booking_count(session) -> int:
    return (await session.execute(select(func.count(Booking.id)))).scalar_one()


@pytest.mark.asyncio
async def test_checkout_prices_each_line(test_session, checkout_data):
    """Lines are priced at item price times quantity, in the item's currency."""
    tour = await TourService(test_session).create(CreateTourRequest(title="Kilimanjaro Machame Route", price=210000))
    activity = await ActivityService(test_session).create(
        CreateActivityRequest(title="Spice Farm Tour", price=3000, currency="EUR")
    )

    results = await CheckoutService(test_session).checkout(CheckoutRequest(
        **checkout_data,
        items=[
            CartItem(item_type="tour", item_id=str(tour.id), quantity=1),
            CartItem(item_type="activity", item_id=str(activity.id), quantity=4),
        ],
    ))

    bookings = [booking for booking, _ in results]
    assert [b.tour_id for b in bookings] == [tour.id, None]
    assert [b.activity_id for b in bookings] == [None, activity.id]
    assert [(b.total_price, b.currency) for b in bookings] == [(210000, "USD"), (12000, "EUR")]
    assert all(b.status == "pending" for b in bookings)
    assert bookings[0].special_requests == "Kilimanjaro Machame Route (Qty: 1)"
    assert bookings[0].tracking_code != bookings[1].tracking_code


@pytest.mark.asyncio
async def test_checkout_unpriced_item(test_session, checkout_data):
    """Items without a price leave the booking total empty."""
    activity = await ActivityService(test_session).create(CreateActivityRequest(title="Jozani Forest Walk"))

    results = await CheckoutService(test_session).checkout(CheckoutRequest(
        **checkout_data,
        nationality="Swedish",
        items=[CartItem(item_type="activity", item_id=str(activity.id), quantity=2)],
    ))

    booking, line = results[0]
    assert booking.total_price is None
    assert line.line_total is None
    assert booking.special_requests == "Jozani Forest Walk (Qty: 2) | Nationality: Swedish"


@pytest.mark.asyncio
async def test_checkout_empty_cart_rejected(test_session, checkout_data):
    with pytest.raises(ValidationError) as exc_info:
        await CheckoutService(test_session).checkout(CheckoutRequest(**checkout_data))

    assert exc_info.value.extensions["violations"][0]["path"] == "items"


@pytest.mark.asyncio
async def test_checkout_past_date_rejected(test_session, checkout_data):
    tour = await TourService(test_session).create(CreateTourRequest(title="Ngorongoro Day Trip"))
    request = CheckoutRequest(
        **{**checkout_data, "travel_date": date(2024, 3, 1)},
        items=[CartItem(item_id=str(tour.id))],
    )

    with pytest.raises(ValidationError):
        await CheckoutService(test_session).checkout(request, today=date(2024, 3, 2))

    assert await _booking_count(test_session) == 0


@pytest.mark.asyncio
async def test_checkout_unknown_item_stores_nothing(test_session, checkout_data):
    """One missing item fails the whole cart."""
    tour = await TourService(test_session).create(CreateTourRequest(title="Ngorongoro Day Trip"))
    request = CheckoutRequest(**checkout_data, items=[
        CartItem(item_id=str(tour.id)),
        CartItem(item_id=str(uuid4())),
    ])

    with pytest.raises(NotFoundError):
        await CheckoutService(test_session).checkout(request)

    assert await _booking_count(test_session) == 0


@pytest.mark.asyncio
async def test_cart_message_with_mixed_currencies(test_session):
    """Totals are shown per currency and unpriced items are marked."""
    tour = await TourService(test_session).create(CreateTourRequest(title="Serengeti Migration", price=150000))
    spice = await ActivityService(test_session).create(
        CreateActivityRequest(title="Spice Farm Tour", price=2550, currency="EUR")
    )
    forest = await ActivityService(test_session).create(CreateActivityRequest(title="Jozani Forest Walk"))

    message, url = await CheckoutService(test_session).whatsapp_link(CartLinkRequest(
        items=[
            CartItem(item_id=str(tour.id), quantity=2),
            CartItem(item_type="activity", item_id=str(spice.id), quantity=2),
            CartItem(item_type="activity", item_id=str(forest.id)),
        ],
        travel_date=date(2026, 12, 20),
    ))

    assert "• Serengeti Migration (x2) - $3,000" in message
    assert "• Spice Farm Tour (x2) - €51" in message
    assert "• Jozani Forest Walk (x1) - Price on request" in message
    assert "*Total: $3,000 + €51*" in message
    assert "Travel Date: December 20, 2026" in message
    assert "Nationality: Not provided" in message
    assert message.endswith("Please confirm availability and send me a quote!")
    assert url.startswith("https://wa.me/255758241294?text=")


@pytest.mark.asyncio
async def test_cart_message_empty_cart(test_session):
    with pytest.raises(ValidationError):
        await CheckoutService(test_session).whatsapp_link(CartLinkRequest())
