"""
create_tables.py
----------------
One-shot script to create all database tables (projects, tickets, blocks).

Usage:
    python create_tables.py
"""

import asyncio

from pippin.core.config import settings
from pippin.db.session import build_engine
from pippin.models import Base  # Imports all models so metadata is populated


async def create_all_tables() -> None:
    engine = build_engine(settings.DATABASE_URL, echo=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    print("All tables created successfully.")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
