from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import MessageResponse
from shared.security import get_current_user_id

from .schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from .service import CategoryService, ProductService

# Reads are public, writes need a bearer token
category_router = APIRouter(prefix="/category", tags=["Category"])
product_router = APIRouter(prefix="/product", tags=["Product"])
public_router = APIRouter()

requires_auth = [Depends(get_current_user_id)]


def get_category_service(request: Request) -> CategoryService:
    return request.app.state.category_service


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "catalog", "status": "running"}


# --- Categories ---

@category_router.get("/", response_model=List[CategoryResponse])
async def list_categories(
    db: AsyncSession = Depends(get_db),
    categories: CategoryService = Depends(get_category_service),
):
    return await categories.get_all(db)


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    categories: CategoryService = Depends(get_category_service),
):
    return await categories.get_by_id(db, category_id)


@category_router.post("/", response_model=CategoryResponse, dependencies=requires_auth)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    categories: CategoryService = Depends(get_category_service),
):
    return await categories.create(db, payload)


@category_router.put("/{category_id}", response_model=CategoryResponse, dependencies=requires_auth)
async def update_category(
    category_id: int,
    patch: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    categories: CategoryService = Depends(get_category_service),
):
    return await categories.update(db, category_id, patch)


@category_router.delete("/{category_id}", response_model=MessageResponse, dependencies=requires_auth)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    categories: CategoryService = Depends(get_category_service),
):
    await categories.delete(db, category_id)
    return MessageResponse(message="resource deleted successfully")


# --- Products ---

@product_router.get("/", response_model=List[ProductResponse])
async def list_products(
    db: AsyncSession = Depends(get_db),
    products: ProductService = Depends(get_product_service),
):
    return await products.get_all(db)


@product_router.get("/category/{category_id}", response_model=List[ProductResponse])
async def list_products_by_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    products: ProductService = Depends(get_product_service),
):
    return await products.get_by_category(db, category_id)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    products: ProductService = Depends(get_product_service),
):
    return await products.get_by_id(db, product_id)


@product_router.post("/", response_model=ProductResponse, dependencies=requires_auth)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
    products: ProductService = Depends(get_product_service),
):
    return await products.create(db, payload)


@product_router.put("/{product_id}", response_model=ProductResponse, dependencies=requires_auth)
async def update_product(
    product_id: int,
    patch: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    products: ProductService = Depends(get_product_service),
):
    return await products.update(db, product_id, patch)


@product_router.delete("/{product_id}", response_model=MessageResponse, dependencies=requires_auth)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    products: ProductService = Depends(get_product_service),
):
    await products.delete(db, product_id)
    return MessageResponse(message="resource deleted successfully")
