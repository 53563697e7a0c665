from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from shared.schemas import CamelModel, PatchModel


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)
    user_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: bool = True


class UserUpdate(PatchModel):
    nullable_fields = frozenset({"user_name", "first_name", "last_name"})

    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=1)
    user_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: Optional[bool] = None


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class AccessTokenRequest(CamelModel):
    refresh_token: str


class UserResponse(CamelModel):
    id: int
    email: str
    user_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SecurityData(CamelModel):
    access_token: str
    refresh_token: str
    access_expiry: datetime
    refresh_expiry: datetime
    token_type: str = "bearer"


class TokenResponse(CamelModel):
    data: UserResponse
    security: SecurityData
