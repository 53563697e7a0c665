"""
Order pricing and status rules.

Prices are a snapshot of what the caller sent at order time; nothing here
consults the catalog. Totals are summed in item order so the stored total
equals the sum of the stored subtotals.
"""
import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from shared.errors import AppError, ErrorKind

from .models import OrderStatus

# Quantity is stored in a 32-bit INTEGER column
MAX_QUANTITY = 2**31 - 1


@dataclass(frozen=True)
class PricedLine:
    product_id: int
    quantity: int
    unit_price: float
    subtotal: float


def _positive(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        as_float = float(value)
    except OverflowError:
        return False
    return math.isfinite(as_float) and value > 0


def price_line(product_id: int, quantity: int, unit_price: float) -> PricedLine:
    if not _positive(quantity) or quantity != int(quantity) or quantity > MAX_QUANTITY:
        raise AppError(ErrorKind.VALIDATION_ERROR, f"quantity must be an integer in 1..{MAX_QUANTITY}")
    if not _positive(unit_price):
        raise AppError(ErrorKind.VALIDATION_ERROR, f"unit price must be positive, got {unit_price!r}")
    quantity = int(quantity)
    subtotal = quantity * unit_price
    if not math.isfinite(subtotal):
        raise AppError(ErrorKind.VALIDATION_ERROR, f"subtotal for product {product_id} is out of range")
    return PricedLine(product_id, quantity, unit_price, subtotal)


def price_order(items: Iterable[Tuple[int, int, float]]) -> Tuple[List[PricedLine], float]:
    """Price (product_id, quantity, unit_price) triples; returns the lines and their total."""
    lines = [price_line(*item) for item in items]
    if not lines:
        raise AppError(ErrorKind.VALIDATION_ERROR, "order must contain at least one item")

    total = 0.0
    for line in lines:
        total += line.subtotal
    if not math.isfinite(total):
        raise AppError(ErrorKind.VALIDATION_ERROR, "order total is out of range")
    return lines, total


def parse_status(value) -> OrderStatus:
    # Any member of the set may follow any other; the set itself is the only rule.
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise AppError(
            ErrorKind.VALIDATION_ERROR, f"unknown order status {value!r}, expected one of: {allowed}"
        ) from None
