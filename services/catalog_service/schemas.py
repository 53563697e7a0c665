from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.schemas import CamelModel, PatchModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: Optional[str] = None


class CategoryUpdate(PatchModel):
    nullable_fields = frozenset({"description"})

    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None


class CategoryResponse(CamelModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductCreate(CamelModel):
    name: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    category_id: int
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool = True


class ProductUpdate(PatchModel):
    nullable_fields = frozenset({"description", "image_url"})

    name: Optional[str] = Field(default=None, min_length=1)
    sku: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[int] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None


class ProductResponse(CamelModel):
    id: int
    name: str
    sku: str
    price: float
    stock: int
    category_id: int
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
