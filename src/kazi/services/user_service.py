"""User service — the credential store.

Learn: Service layer separates business logic from HTTP routing.
UserService is the only code that reads or writes the users table.
Lookups by phone always take an already-normalized phone; normalizing
is the caller's job (AuthService), so the store never guesses.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.db.models import User, parse_uuid
from kazi.errors import ConflictError

MAX_EMPLOYEES = 50


class UserService:
    """Persistence for user records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id) -> Optional[User]:
        parsed = parse_uuid(user_id)
        if parsed is None:
            return None
        return await self.db.get(User, parsed)

    async def get_by_phone(self, phone: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.phone == phone))
        return result.scalars().first()

    async def phone_exists(self, phone: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.phone == phone))
        return result.first() is not None

    async def add(self, user: User) -> User:
        """Insert a new user.

        The unique index on phone is the real guard against two sign-ups
        racing past the earlier existence check; its violation is a
        ConflictError, same as the check.
        """
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User already exists with this phone number")
        await self.db.refresh(user)
        return user

    async def save(self, user: User) -> User:
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def list_employees(self, limit: int = MAX_EMPLOYEES) -> list[User]:
        result = await self.db.execute(
            select(User)
            .where(User.role == "employee")
            .order_by(User.join_date.desc())
            .limit(min(limit, MAX_EMPLOYEES))
        )
        return list(result.scalars().all())
