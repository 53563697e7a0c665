from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import store_errors
from shared.persistence import CrudRepository

from .models import User


class UserRepository(CrudRepository[User]):
    model = User
    updatable_fields = frozenset(
        {"user_name", "email", "first_name", "last_name", "is_active", "hashed_password"}
    )

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        async with store_errors(db, self._logger, "get_by_email"):
            result = await db.execute(select(User).where(User.email == email))
            return result.scalars().first()
