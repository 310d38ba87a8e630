"""Tests for the UserRepository."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from food_order.database.repository import UserRepository
from food_order.models.user import Base, User

# ── In-memory test database ─────────────────────────────
_test_engine = create_async_engine(
    "sqlite+aiosqlite://", echo=False, poolclass=StaticPool
)
_test_session_factory = async_sessionmaker(_test_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session():
    """Create tables in a fresh in-memory DB and yield a session."""
    async with _test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with _test_session_factory() as session:
        # Seed test data
        session.add_all(
            [
                User(
                    name="Test User",
                    email="test@example.com",
                    phone="+15551234567",
                    password="secret",
                ),
                User(
                    name="Closed Account",
                    email="closed@example.com",
                    password="secret",
                    is_active=False,
                ),
            ]
        )
        await session.commit()
        yield session

    # Tear down
    async with _test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await _test_engine.dispose()


# ── Tests ────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_find_by_email_match(db_session: AsyncSession):
    repo = UserRepository(db_session)
    user = await repo.find_by_email("test@example.com")
    assert user is not None
    assert user.name == "Test User"
    assert user.phone == "+15551234567"


@pytest.mark.asyncio
async def test_find_by_email_no_match(db_session: AsyncSession):
    repo = UserRepository(db_session)
    assert await repo.find_by_email("nobody@example.com") is None


@pytest.mark.asyncio
async def test_find_by_email_skips_inactive(db_session: AsyncSession):
    repo = UserRepository(db_session)
    assert await repo.find_by_email("closed@example.com") is None


@pytest.mark.asyncio
async def test_update_password(db_session: AsyncSession):
    repo = UserRepository(db_session)
    assert await repo.update_password("test@example.com", "new-secret") is True
    await db_session.commit()

    user = await repo.find_by_email("test@example.com")
    await db_session.refresh(user)
    assert user.password == "new-secret"


@pytest.mark.asyncio
async def test_update_password_unknown_or_inactive(db_session: AsyncSession):
    repo = UserRepository(db_session)
    assert await repo.update_password("nobody@example.com", "x") is False
    assert await repo.update_password("closed@example.com", "x") is False
