"""
create_tables.py
----------------
One-shot script to create all database tables.
Use this for quick setup. For production migrations, use Alembic instead.

Usage:
    python create_tables.py
"""

import asyncio

from backoffice.db.session import database


async def create_all_tables() -> None:
    database.init(echo=True)
    try:
        await database.create_all()
    finally:
        await database.close()
    print("✅  All tables created successfully.")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
