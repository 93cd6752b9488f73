"""Demo markets for a fresh database."""
import logging
from datetime import datetime, timedelta

import click

from predictx.events.models import Event
from predictx.extensions import db as mongo

logger = logging.getLogger(__name__)

DEMO_IMAGE = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&w=2670&q=80"

# (closing offset, resolution offset) in days from seeding time
DEMO_EVENTS = [
    {
        "title": "Will India win more than 10 gold medals in Olympics 2024?",
        "description": "This market resolves to YES if India wins 11 or more gold medals in the 2024 Paris Olympics, and NO otherwise.",
        "category": "Sports",
        "offsets": (30, 47),
        "resolution_source": "Official Olympic medal tally",
        "yes_price": 0.35,
        "no_price": 0.65,
        "yes_volume": 5000,
        "no_volume": 8500,
        "image_url": DEMO_IMAGE.format("1560090995-01632a28895b"),
    },
    {
        "title": "Will Sensex cross 80,000 before December 2023?",
        "description": "This market resolves to YES if the BSE Sensex index closes above 80,000 points on any trading day before December 31, 2023.",
        "category": "Finance",
        "offsets": (60, 61),
        "resolution_source": "BSE India official closing values",
        "yes_price": 0.25,
        "no_price": 0.75,
        "yes_volume": 10000,
        "no_volume": 30000,
        "image_url": DEMO_IMAGE.format("1611974789855-9c2a0a7236a3"),
    },
    {
        "title": "Will India have a normal monsoon in 2023?",
        "description": 'Market resolves to YES if the India Meteorological Department declares 2023 monsoon rainfall as "normal" (96%-104% of long-period average).',
        "category": "Climate",
        "offsets": (20, 35),
        "resolution_source": "India Meteorological Department official report",
        "yes_price": 0.60,
        "no_price": 0.40,
        "yes_volume": 12000,
        "no_volume": 8000,
        "image_url": DEMO_IMAGE.format("1599155253646-ae98fef67248"),
    },
    {
        "title": "Will AI regulation bill pass in Indian Parliament before 2024?",
        "description": "This market resolves to YES if any AI regulatory legislation is passed by both houses of Indian Parliament before January 1, 2024.",
        "category": "Politics",
        "offsets": (45, 50),
        "resolution_source": "Official Gazette of India",
        "yes_price": 0.15,
        "no_price": 0.85,
        "yes_volume": 3000,
        "no_volume": 17000,
        "image_url": DEMO_IMAGE.format("1675541481868-6aea53dc9557"),
    },
]


def seed_events(now=None):
    """Insert the demo markets if there are no events yet. Returns how many were inserted."""
    if mongo.events.count_documents({}) > 0:
        logger.info("Events collection not empty, skipping seed")
        return 0

    now = now or datetime.utcnow()
    documents = []
    for demo in DEMO_EVENTS:
        closing_offset, resolution_offset = demo["offsets"]
        event = Event(
            title=demo["title"],
            description=demo["description"],
            category=demo["category"],
            closing_date=now + timedelta(days=closing_offset),
            resolution_date=now + timedelta(days=resolution_offset),
            resolution_source=demo["resolution_source"],
            yes_price=demo["yes_price"],
            no_price=demo["no_price"],
            fee=0.02,
            image_url=demo["image_url"],
            yes_volume=demo["yes_volume"],
            no_volume=demo["no_volume"],
        )
        documents.append(event.to_document())

    mongo.events.insert_many(documents)
    logger.info("Seeded %d demo events", len(documents))
    return len(documents)


def register_commands(app):
    @app.cli.command("seed-events")
    def seed_events_command():
        """Insert the demo markets into an empty database."""
        inserted = seed_events()
        click.echo(f"Inserted {inserted} events")
