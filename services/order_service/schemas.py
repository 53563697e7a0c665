from datetime import datetime
from typing import List, Optional

from pydantic import Field

from shared.schemas import CamelModel


class OrderItemCreate(CamelModel):
    product_id: int
    quantity: int
    unit_price: float


class OrderCreate(CamelModel):
    # Any client-supplied status or total is ignored
    shipping_address: Optional[str] = None
    items: List[OrderItemCreate] = Field(default_factory=list)


class OrderStatusUpdate(CamelModel):
    status: str


class OrderItemResponse(CamelModel):
    id: int
    product_id: int
    quantity: int
    unit_price: float
    subtotal: float


class OrderResponse(CamelModel):
    id: int
    user_id: int
    status: str
    total_amount: float
    shipping_address: Optional[str] = None
    ordered_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[OrderItemResponse] = []
