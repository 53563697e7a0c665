from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import get_current_user_id

from .schemas import OrderCreate, OrderResponse, OrderStatusUpdate
from .service import OrderService

# THIS PROTECTS THE ENTIRE SERVICE
router = APIRouter(prefix="/order", tags=["Order"], dependencies=[Depends(get_current_user_id)])
public_router = APIRouter()


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "order", "status": "running"}


@router.get("/", response_model=List[OrderResponse])
async def list_orders(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    orders: OrderService = Depends(get_order_service),
):
    return await orders.get_all(db, user_id)


@router.post("/", response_model=OrderResponse)
async def create_order(
    payload: OrderCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    orders: OrderService = Depends(get_order_service),
):
    return await orders.create(db, user_id, payload)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    orders: OrderService = Depends(get_order_service),
):
    return await orders.get_by_id(db, user_id, order_id)


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    orders: OrderService = Depends(get_order_service),
):
    return await orders.update_status(db, user_id, order_id, payload.status)
