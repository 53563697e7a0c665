"""
User and authentication use cases.

Persistence errors arrive already classified by UserRepository and pass
through unchanged; this layer only adds NotAuthenticated/NotAuthorized.
bcrypt work is CPU-bound, so hashing and checking run in a worker thread.
"""
import asyncio
from typing import List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.errors import AppError, ErrorKind
from shared.observability.metrics import ecomm_login_total
from shared.security import IssuedToken, PasswordHasher, TokenService, TokenType

from .models import User
from .repository import UserRepository
from .schemas import SecurityData, UserCreate, UserLogin, UserUpdate

# Same detail for unknown email and wrong password
_LOGIN_REJECTED = "email or password does not match"


class UserService:

    def __init__(self, repository: UserRepository, hasher: PasswordHasher, logger):
        self._repository = repository
        self._hasher = hasher
        self._logger = logger

    async def get_all(self, db: AsyncSession) -> List[User]:
        self._logger.info("getting all users")
        return await self._repository.get_all(db)

    async def get_by_id(self, db: AsyncSession, user_id: int) -> User:
        self._logger.info("getting user by id", user_id=user_id)
        return await self._repository.get_by_id(db, user_id)

    async def create(self, db: AsyncSession, data: UserCreate) -> User:
        self._logger.info("creating user", email=data.email)
        user = User(
            email=data.email,
            user_name=data.user_name,
            first_name=data.first_name,
            last_name=data.last_name,
            is_active=data.is_active,
            hashed_password=await asyncio.to_thread(self._hasher.hash, data.password),
        )
        return await self._repository.create(db, user)

    async def update(self, db: AsyncSession, user_id: int, patch: UserUpdate) -> User:
        fields = patch.changes()
        self._logger.info("updating user", user_id=user_id, fields=sorted(fields))
        if "password" in fields:
            password = fields.pop("password")
            fields["hashed_password"] = await asyncio.to_thread(self._hasher.hash, password)
        return await self._repository.update(db, user_id, fields)

    async def delete(self, db: AsyncSession, user_id: int) -> None:
        self._logger.info("deleting user", user_id=user_id)
        await self._repository.delete(db, user_id)


class AuthService:

    def __init__(
        self,
        repository: UserRepository,
        users: UserService,
        tokens: TokenService,
        hasher: PasswordHasher,
        logger,
    ):
        self._repository = repository
        self._users = users
        self._tokens = tokens
        self._hasher = hasher
        self._logger = logger

    async def register(self, db: AsyncSession, data: UserCreate) -> User:
        # Self-registered accounts are always active
        return await self._users.create(db, data.model_copy(update={"is_active": True}))

    async def login(self, db: AsyncSession, data: UserLogin) -> Tuple[User, SecurityData]:
        self._logger.info("user login attempt", email=data.email)
        user = await self._repository.get_by_email(db, data.email)
        if user is None:
            await asyncio.to_thread(self._hasher.dummy_check)
            ecomm_login_total.labels(outcome="rejected").inc()
            raise AppError(ErrorKind.NOT_AUTHENTICATED, _LOGIN_REJECTED)

        matches = await asyncio.to_thread(self._hasher.check, user.hashed_password, data.password)
        if not matches:
            ecomm_login_total.labels(outcome="rejected").inc()
            raise AppError(ErrorKind.NOT_AUTHENTICATED, _LOGIN_REJECTED)

        if not user.is_active:
            ecomm_login_total.labels(outcome="disabled").inc()
            raise AppError(ErrorKind.NOT_AUTHORIZED, f"account {user.id} is disabled")

        access = self._tokens.issue(user.id, TokenType.ACCESS)
        refresh = self._tokens.issue(user.id, TokenType.REFRESH)
        ecomm_login_total.labels(outcome="success").inc()
        return user, _security(access, refresh.token, refresh.expires_at)

    async def refresh_access_token(
        self, db: AsyncSession, refresh_token: str
    ) -> Tuple[User, SecurityData]:
        self._logger.info("refreshing access token")
        claims = self._tokens.verify(refresh_token, TokenType.REFRESH)
        user = await self._repository.get_by_id(db, claims.principal_id)
        if not user.is_active:
            raise AppError(ErrorKind.NOT_AUTHORIZED, f"account {user.id} is disabled")
        access = self._tokens.issue(user.id, TokenType.ACCESS)
        return user, _security(access, refresh_token, claims.expires_at)


def _security(access: IssuedToken, refresh_token: str, refresh_expiry) -> SecurityData:
    return SecurityData(
        access_token=access.token,
        refresh_token=refresh_token,
        access_expiry=access.expires_at,
        refresh_expiry=refresh_expiry,
    )


async def seed_initial_user(
    session_factory: async_sessionmaker, repository: UserRepository, hasher: PasswordHasher,
    email: str, password: str, logger,
) -> bool:
    """Create the seed principal if it does not exist yet. Returns True when created."""
    async with session_factory() as db:
        if await repository.get_by_email(db, email) is not None:
            logger.info("initial user already exists, skipping seed", email=email)
            return False
        user = User(
            email=email,
            is_active=True,
            hashed_password=await asyncio.to_thread(hasher.hash, password),
        )
        await repository.create(db, user)
    logger.info("initial user seeded", email=email)
    return True
