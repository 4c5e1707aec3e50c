"""
Database bootstrap: create the shakas table and seed a few starter rows

Usage:
    python scripts/init_db.py               # local SQL database (DATABASE_URL_SYNC)
    python scripts/init_db.py --print-sql   # Postgres DDL for the hosted table
"""

import argparse
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import sessionmaker
from sqlalchemy.schema import CreateIndex, CreateTable

from shaka_api.core.config import settings
from shaka_api.core.database import create_sync_engine
from shaka_api.models.shaka import Base, Shaka

SEED_USER_AGENT = "Initial Data"

INITIAL_SHAKAS = [
    {"latitude": 21.3099, "longitude": -157.8581, "location_name": "Honolulu, Hawaii"},
    {"latitude": 36.7783, "longitude": -119.4179, "location_name": "California, USA"},
    {"latitude": -33.8688, "longitude": 151.2093, "location_name": "Sydney, Australia"},
]


def seed_rows(now: datetime) -> list[Shaka]:
    """Starter shakas spaced a day apart, oldest last"""
    return [
        Shaka(
            **shaka,
            user_agent=SEED_USER_AGENT,
            created_at=now - timedelta(hours=24 * index)
        )
        for index, shaka in enumerate(INITIAL_SHAKAS, 1)
    ]


def postgres_ddl() -> str:
    dialect = postgresql.dialect()
    table = Shaka.__table__
    statements = [str(CreateTable(table).compile(dialect=dialect)).strip()]
    statements += [
        str(CreateIndex(index).compile(dialect=dialect)).strip()
        for index in sorted(table.indexes, key=lambda index: index.name)
    ]
    return ";\n\n".join(statements) + ";"


def init_db(database_url_sync: str) -> int:
    """
    Create schema and seed an empty table

    Returns:
        number of rows seeded
    """
    engine = create_sync_engine(database_url_sync, echo=settings.debug)
    Base.metadata.create_all(engine)

    Session = sessionmaker(bind=engine)
    try:
        with Session() as session:
            existing = session.execute(select(func.count()).select_from(Shaka)).scalar_one()
            if existing:
                print(f"Table already has {existing} shakas, skipping seed")
                return 0

            rows = seed_rows(datetime.now(timezone.utc))
            session.add_all(rows)
            session.commit()
            return len(rows)
    finally:
        engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Initialize the shakas database")
    parser.add_argument(
        "--print-sql",
        action="store_true",
        help="print Postgres DDL for the hosted table and exit"
    )
    args = parser.parse_args()

    if args.print_sql:
        print(postgres_ddl())
        return

    try:
        seeded = init_db(settings.database_url_sync)
    except Exception as e:
        print(f"Error initializing database: {e}")
        sys.exit(1)

    print("✅ Database initialized successfully!")
    print(f"Seeded {seeded} shakas")


if __name__ == "__main__":
    main()
