import math

import pytest

from shared.errors import AppError, ErrorKind
from services.order_service.models import OrderStatus
from services.order_service.pricing import parse_status, price_line, price_order


def test_subtotals_and_total():
    lines, total = price_order([(1, 2, 10.0), (2, 1, 5.5), (3, 3, 0.25)])

    assert [line.subtotal for line in lines] == [20.0, 5.5, 0.75]
    assert total == 26.25
    assert all(line.subtotal == line.quantity * line.unit_price for line in lines)


def test_total_is_the_in_order_sum_of_subtotals():
    items = [(i, i, 0.1 * i) for i in range(1, 20)]
    lines, total = price_order(items)

    expected = 0.0
    for line in lines:
        expected += line.subtotal
    assert total == expected


def test_lines_keep_the_snapshot_price():
    line = price_line(7, 3, 19.99)

    assert line.product_id == 7
    assert line.quantity == 3
    assert line.unit_price == 19.99


def test_empty_order_is_rejected():
    with pytest.raises(AppError) as excinfo:
        price_order([])
    assert excinfo.value.kind is ErrorKind.VALIDATION_ERROR


@pytest.mark.parametrize(
    "quantity, unit_price",
    [(0, 1.0), (-1, 1.0), (1, 0.0), (1, -2.5), (1, math.inf), (1, math.nan), (1.5, 1.0)],
)
def test_non_positive_values_are_rejected(quantity, unit_price):
    with pytest.raises(AppError) as excinfo:
        price_order([(1, 2, 3.0), (2, quantity, unit_price)])
    assert excinfo.value.kind is ErrorKind.VALIDATION_ERROR


@pytest.mark.parametrize("value", [s.value for s in OrderStatus])
def test_every_known_status_parses(value):
    assert parse_status(value).value == value


@pytest.mark.parametrize("value", ["PAID", "refunded", "", None])
def test_unknown_status_is_a_validation_error(value):
    with pytest.raises(AppError) as excinfo:
        parse_status(value)
    assert excinfo.value.kind is ErrorKind.VALIDATION_ERROR


@pytest.mark.parametrize(
    "items",
    [
        [(1, 10**400, 1.0)],
        [(1, 2**31, 1.0)],
        [(1, 10, 1e308)],
        [(1, 1, 1e308), (2, 1, 1e308)],
    ],
    ids=["quantity-beyond-float", "quantity-beyond-column", "subtotal-overflow", "total-overflow"],
)
def test_out_of_range_amounts_are_rejected(items):
    with pytest.raises(AppError) as excinfo:
        price_order(items)
    assert excinfo.value.kind is ErrorKind.VALIDATION_ERROR


def test_largest_quantity_is_accepted():
    lines, total = price_order([(1, 2**31 - 1, 1.0)])
    assert total == float(2**31 - 1)
