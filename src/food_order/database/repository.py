"""User repository — data access layer for account lookups."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from food_order.models.user import User


class UserRepository:
    """Encapsulates all database queries related to users."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> User | None:
        """Look up an active user by email address."""
        stmt = select(User).where(User.email == email, User.is_active.is_(True))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_password(self, email: str, password: str) -> bool:
        """Overwrite the password for *email*.

        Returns ``True`` if an active account was updated.
        """
        stmt = (
            update(User)
            .where(User.email == email, User.is_active.is_(True))
            .values(password=password)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0
