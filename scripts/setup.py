#!/usr/bin/env python3
"""Setup script for the Infinity Voyage booking API.

Creates the schema, seeds a small published catalog and prints a bearer token
for the back-office.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from sqlalchemy import func, select

from voyage.core.database import async_session_factory, close_db, init_db
from voyage.core.security import ADMIN_ROLE, create_access_token
from voyage.models import Activity, SiteSetting, Tour, Transfer

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


SAMPLE_TOURS = [
    {
        "title": "3 Days Serengeti & Ngorongoro Safari",
        "slug": "3-days-serengeti-ngorongoro-safari",
        "short_description": "Big Five game drives across the Serengeti plains and the crater floor",
        "duration": "3 days",
        "price": 95000,
        "category": "Wildlife Safari",
        "difficulty": "Easy",
        "max_group_size": 6,
        "included": ["Park fees", "Game drives", "Accommodation", "Meals"],
        "excluded": ["Flights", "Tips"],
        "highlights": ["Great Migration", "Ngorongoro Crater"],
        "itinerary": [
            {"day": 1, "title": "Arusha to Serengeti", "description": "", "activities": ["Game drive"]},
            {"day": 2, "title": "Full day Serengeti", "description": "", "activities": ["Game drive"]},
            {"day": 3, "title": "Ngorongoro Crater", "description": "", "activities": ["Crater tour"]},
        ],
        "is_featured": True,
    },
    {
        "title": "Kilimanjaro Machame Route",
        "slug": "kilimanjaro-machame-route",
        "short_description": "Seven days on the 'Whiskey' route to Uhuru Peak",
        "duration": "7 days",
        "price": 210000,
        "category": "Climbing",
        "difficulty": "Challenging",
        "max_group_size": 10,
    },
    {
        "title": "Zanzibar Beach Escape",
        "slug": "zanzibar-beach-escape",
        "short_description": "Four relaxed days on the east coast",
        "duration": "4 days",
        "price": 60000,
        "category": "Beach Holiday",
        "difficulty": "Easy",
    },
]

SAMPLE_ACTIVITIES = [
    {
        "title": "Stone Town Walking Tour",
        "slug": "stone-town-walking-tour",
        "duration": "3 hours",
        "price": 2500,
        "location": "Stone Town",
        "category": "Cultural",
    },
    {
        "title": "Mnemba Island Snorkeling",
        "slug": "mnemba-island-snorkeling",
        "duration": "Half day",
        "price": 4500,
        "location": "Matemwe",
        "category": "Marine",
    },
]

SAMPLE_TRANSFERS = [
    {
        "title": "Airport to Stone Town",
        "slug": "airport-to-stone-town",
        "transfer_type": "airport",
        "route_from": "Abeid Amani Karume Airport",
        "route_to": "Stone Town",
        "price_small_group": 2500,
        "price_large_group": 4000,
        "vehicle_type": "Minivan",
        "max_passengers": 7,
        "features": ["Meet & greet", "Air conditioning"],
        "is_featured": True,
    },
]


async def setup_database():
    """Create all tables."""
    logger.info("Setting up database...")
    await init_db()
    logger.info("Database schema created")


async def create_sample_data():
    """Create a small published catalog unless tours already exist."""
    logger.info("Creating sample data...")

    async with async_session_factory() as db:
        try:
            existing_tours = await db.execute(select(func.count(Tour.id)))
            if existing_tours.scalar_one() > 0:
                logger.info("Sample data already exists, skipping...")
                return

            for data in SAMPLE_TOURS:
                db.add(Tour(is_published=True, **data))
            for data in SAMPLE_ACTIVITIES:
                db.add(Activity(is_published=True, **data))
            for data in SAMPLE_TRANSFERS:
                db.add(Transfer(is_published=True, **data))

            db.add(SiteSetting(key="general", value={
                "siteName": "Infinity Voyage Tours & Safaris",
                "tagline": "Tanzania Safari & Zanzibar Adventures",
                "logo": None,
                "favicon": None,
                "email": "info@infinityvoyagetours.com",
                "phone": "+255 758 241 294",
                "whatsapp": "255758241294",
                "address": "Kisauni, Zanzibar, Tanzania",
            }))

            await db.commit()
            logger.info("Sample data created successfully!")

        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to create sample data: {e}")
            raise


async def main(seed: bool, admin_subject: str):
    """Main setup function."""
    logger.info("Starting booking API setup...")

    try:
        await setup_database()
        if seed:
            await create_sample_data()
    finally:
        await close_db()

    token = create_access_token(subject=admin_subject, roles=[ADMIN_ROLE])
    logger.info("Setup completed successfully!")
    logger.info("Back-office bearer token for %s:\n%s", admin_subject, token)
    logger.info("You can now start the API server with: cd server && uvicorn voyage.main:app --reload")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--no-seed", action="store_true", help="Only create the schema")
    parser.add_argument("--admin", default="admin", help="Subject of the printed admin token")
    args = parser.parse_args()

    asyncio.run(main(seed=not args.no_seed, admin_subject=args.admin))
