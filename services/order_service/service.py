from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import AppError, ErrorKind
from shared.observability.metrics import (
    ecomm_order_status_updates_total,
    ecomm_order_total_amount,
    ecomm_orders_created_total,
)

from .models import Order, OrderItem, OrderStatus
from .pricing import parse_status, price_order
from .repository import OrderRepository
from .schemas import OrderCreate


class OrderService:

    def __init__(self, repository: OrderRepository, logger):
        self._repository = repository
        self._logger = logger

    async def get_all(self, db: AsyncSession, user_id: int) -> List[Order]:
        self._logger.info("getting orders for user", user_id=user_id)
        return await self._repository.get_by_user(db, user_id)

    async def get_by_id(self, db: AsyncSession, user_id: int, order_id: int) -> Order:
        order = await self._repository.get_by_id(db, order_id)
        # Another principal's order is indistinguishable from a missing one
        if order.user_id != user_id:
            raise AppError(ErrorKind.NOT_FOUND, f"Order {order_id} not found")
        return order

    async def create(self, db: AsyncSession, user_id: int, data: OrderCreate) -> Order:
        lines, total = price_order(
            (item.product_id, item.quantity, item.unit_price) for item in data.items
        )
        order = Order(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            total_amount=total,
            shipping_address=data.shipping_address,
            items=[
                OrderItem(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    subtotal=line.subtotal,
                )
                for line in lines
            ],
        )
        order = await self._repository.create(db, order)

        ecomm_orders_created_total.inc()
        ecomm_order_total_amount.observe(total)
        self._logger.info("order created", order_id=order.id, user_id=user_id, items=len(lines), total=total)
        return order

    async def update_status(self, db: AsyncSession, user_id: int, order_id: int, new_status: str) -> Order:
        # A missing order is reported before a bad status
        order = await self.get_by_id(db, user_id, order_id)
        status = parse_status(new_status)
        previous = order.status

        order = await self._repository.update(db, order_id, {"status": status.value})

        ecomm_order_status_updates_total.labels(status=status.value).inc()
        self._logger.info("order status updated", order_id=order_id, previous=previous, status=status.value)
        return order
