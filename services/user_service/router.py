from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import MessageResponse
from shared.security import get_current_user_id

from .schemas import (
    AccessTokenRequest,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserUpdate,
)
from .service import AuthService, UserService

auth_router = APIRouter(prefix="/auth", tags=["Authentication"])
# Every user route requires a valid access token
user_router = APIRouter(
    prefix="/user", tags=["User"], dependencies=[Depends(get_current_user_id)]
)
public_router = APIRouter()


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "user", "status": "running"}


@auth_router.post(
    "/register",
    response_model=UserResponse,
    summary="Register a new user account",
)
async def register(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    return await auth.register(db, payload)


@auth_router.post(
    "/login",
    response_model=TokenResponse,
    summary="Authenticate and receive access and refresh tokens",
)
async def login(
    payload: UserLogin,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    user, security = await auth.login(db, payload)
    return TokenResponse(data=UserResponse.model_validate(user), security=security)


@auth_router.post(
    "/access-token",
    response_model=TokenResponse,
    summary="Exchange a refresh token for a new access token",
)
async def access_token(
    payload: AccessTokenRequest,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    user, security = await auth.refresh_access_token(db, payload.refresh_token)
    return TokenResponse(data=UserResponse.model_validate(user), security=security)


@auth_router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the current authenticated user's profile",
)
async def get_me(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    return await users.get_by_id(db, user_id)


@user_router.get("/", response_model=List[UserResponse])
async def list_users(
    db: AsyncSession = Depends(get_db), users: UserService = Depends(get_user_service)
):
    return await users.get_all(db)


@user_router.post("/", response_model=UserResponse)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    return await users.create(db, payload)


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    return await users.get_by_id(db, user_id)


@user_router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    patch: UserUpdate,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    return await users.update(db, user_id, patch)


@user_router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    await users.delete(db, user_id)
    return MessageResponse(message="resource deleted successfully")
