"""Seed script — populates the database with sample storefront accounts."""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from food_order.database.engine import async_session_factory, init_db
from food_order.database.repository import UserRepository
from food_order.models.user import User

SAMPLE_USERS = [
    User(
        name="Alice Johnson",
        email="alice@example.com",
        phone="+15551234567",
        password="alice123",
    ),
    User(
        name="Bob Smith",
        email="bob@example.com",
        phone="+15559876543",
        password="bob123",
    ),
    User(
        name="Carol Davis",
        email="carol@example.com",
        phone="+442071234567",
        password="carol123",
    ),
]


async def seed() -> None:
    """Insert sample users that are not already present."""
    await init_db()
    added = 0
    async with async_session_factory() as session:
        session: AsyncSession
        repo = UserRepository(session)
        for user in SAMPLE_USERS:
            if await repo.find_by_email(user.email) is None:
                session.add(user)
                added += 1
        await session.commit()
    print(f"✅ Seeded {added} users into the database.")


if __name__ == "__main__":
    asyncio.run(seed())
