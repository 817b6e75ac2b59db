"""Read-only sales queries over historical orders.

Scheme participation replays :func:`allocate_freebies` on each order's paid
lines rather than re-implementing the threshold logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .freebies import allocate_for_order_lines
from .money import ZERO
from .schemes import SchemePools, eligible_schemes
from .types import AppliedScheme, Distributor, OrderSnapshot, OrderStatus, Scheme


@dataclass
class SkuSales:
    paid: int = 0
    free: int = 0
    sales_value: Decimal = ZERO


SalesMatrix = Dict[str, Dict[str, SkuSales]]


def delivered_orders(
    orders: Iterable[OrderSnapshot], start: Optional[date] = None, end: Optional[date] = None
) -> List[OrderSnapshot]:
    """Delivered orders, optionally limited to an inclusive order-date range."""
    return [
        order
        for order in orders
        if order.status is OrderStatus.DELIVERED
        and (start is None or order.order_date >= start)
        and (end is None or order.order_date <= end)
    ]


def sales_matrix(
    orders: Iterable[OrderSnapshot], start: Optional[date] = None, end: Optional[date] = None
) -> SalesMatrix:
    """``distributor_id -> sku_id -> SkuSales`` over delivered orders."""
    matrix: SalesMatrix = {}
    for order in delivered_orders(orders, start, end):
        row = matrix.setdefault(order.distributor_id, {})
        for line in order.items:
            cell = row.setdefault(line.sku_id, SkuSales())
            if line.is_freebie:
                cell.free += line.quantity
            else:
                cell.paid += line.quantity
                cell.sales_value += line.quantity * line.unit_price
    return matrix


def free_unit_totals(
    orders: Iterable[OrderSnapshot], start: Optional[date] = None, end: Optional[date] = None
) -> Dict[str, int]:
    paid = free = 0
    for order in delivered_orders(orders, start, end):
        for line in order.items:
            if line.is_freebie:
                free += line.quantity
            else:
                paid += line.quantity
    return {"paid": paid, "free": free}


def scheme_participation(
    order: OrderSnapshot, distributor: Distributor, pools: SchemePools
) -> List[AppliedScheme]:
    """Schemes that applied to ``order``, evaluated as of the order's date."""
    schemes = eligible_schemes(pools, distributor, order.order_date)
    return allocate_for_order_lines(order.items, schemes).applied_schemes


def participation_count(
    orders: Iterable[OrderSnapshot], distributor: Distributor, pools: SchemePools
) -> int:
    """Number of the distributor's delivered orders in which at least one scheme applied."""
    return sum(
        1
        for order in delivered_orders(orders)
        if order.distributor_id == distributor.id and scheme_participation(order, distributor, pools)
    )


def orders_meeting_scheme(orders: Iterable[OrderSnapshot], scheme: Scheme) -> List[OrderSnapshot]:
    """Delivered orders whose paid quantity of the scheme's buy SKU reaches its threshold."""
    matching = []
    for order in delivered_orders(orders):
        bought = sum(line.quantity for line in order.paid_lines if line.sku_id == scheme.buy_sku_id)
        if bought >= scheme.buy_quantity:
            matching.append(order)
    return matching

