"""Single entry points for the three places an order is priced.

New distributor orders, internal plant-to-store transfers and edits of a
pending order all run the same pipeline: resolve prices, filter schemes,
allocate freebies, total, then check stock and funds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .edit import EditDelta, committed_quantities, order_delta
from .feasibility import check_distributor_funds, check_edit_funds, check_stock, check_store_funds
from .freebies import allocate_freebies, freebie_lines, purchased_quantities
from .money import ZERO
from .pricing import build_tier_price_map, price_draft_lines
from .schemes import SchemePools, eligible_schemes
from .totals import calculate_totals
from .types import (
    DisplayLine,
    Distributor,
    DraftItem,
    OrderPreview,
    OrderSnapshot,
    PriceTierItem,
    Sku,
    StockLevel,
    Store,
    SubmissionItem,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Catalog:
    skus: Mapping[str, Sku]
    tier_items: Sequence[PriceTierItem] = field(default_factory=tuple)

    @classmethod
    def from_lists(cls, skus: Iterable[Sku], tier_items: Iterable[PriceTierItem] = ()) -> "Catalog":
        return cls(skus={sku.id: sku for sku in skus}, tier_items=tuple(tier_items))

    def tier_prices(self, tier_id: Optional[str]):
        return build_tier_price_map(self.tier_items, tier_id)


@dataclass
class EditPreview(OrderPreview):
    original_total: Decimal = ZERO
    delta: Optional[EditDelta] = None


def stock_map(levels: Iterable[StockLevel]) -> Dict[str, StockLevel]:
    return {level.sku_id: level for level in levels}


def _submission(paid: List[DisplayLine]) -> List[SubmissionItem]:
    return [SubmissionItem(sku_id=line.sku_id, quantity=line.quantity) for line in paid]


def _price_and_allocate(items, catalog, tier_id, schemes, *, use_tier_prices=True):
    paid = price_draft_lines(
        items, catalog.skus, catalog.tier_prices(tier_id), use_tier_prices=use_tier_prices
    )
    allocation = allocate_freebies(purchased_quantities(paid), schemes)
    return paid, allocation, paid + freebie_lines(allocation, catalog.skus)


def preview_distributor_order(
    items: Sequence[DraftItem],
    distributor: Distributor,
    catalog: Catalog,
    pools: SchemePools,
    stock: Mapping[str, StockLevel],
    as_of: date,
) -> OrderPreview:
    """Preview a new order. ``as_of`` is the date the order is being placed."""
    schemes = eligible_schemes(pools, distributor, as_of)
    paid, allocation, lines = _price_and_allocate(items, catalog, distributor.price_tier_id, schemes)
    totals = calculate_totals(lines, catalog.skus)
    stock_check = check_stock(lines, stock)
    funds = check_distributor_funds(totals.grand_total, distributor)
    can_submit = bool(paid) and totals.grand_total > ZERO and not stock_check.has_issues and funds.passes
    logger.debug(
        "Order preview for %s: %d line(s), total %s, submit=%s",
        distributor.id, len(lines), totals.grand_total, can_submit,
    )
    return OrderPreview(
        lines=lines,
        applied_schemes=allocation.applied_schemes,
        totals=totals,
        stock_check=stock_check,
        funds_check=funds,
        can_submit=can_submit,
        submission=_submission(paid),
    )


def preview_store_transfer(
    items: Sequence[DraftItem],
    store: Store,
    catalog: Catalog,
    pools: SchemePools,
    stock: Mapping[str, StockLevel],
    as_of: date,
) -> OrderPreview:
    """Preview an internal transfer from the plant to ``store``.

    Transfers use base prices, carry no GST, only see global schemes and are
    paid from the store wallet. ``stock`` must be the plant's stock.
    """
    schemes = eligible_schemes(pools, None, as_of)
    paid, allocation, lines = _price_and_allocate(items, catalog, None, schemes, use_tier_prices=False)
    totals = calculate_totals(lines, catalog.skus, apply_gst=False)
    stock_check = check_stock(lines, stock)
    funds = check_store_funds(totals.grand_total, store)
    can_submit = bool(paid) and totals.grand_total > ZERO and not stock_check.has_issues and funds.passes
    return OrderPreview(
        lines=lines,
        applied_schemes=allocation.applied_schemes,
        totals=totals,
        stock_check=stock_check,
        funds_check=funds,
        can_submit=can_submit,
        submission=_submission(paid),
    )


def preview_order_edit(
    items: Sequence[DraftItem],
    order: OrderSnapshot,
    distributor: Distributor,
    catalog: Catalog,
    pools: SchemePools,
    stock: Mapping[str, StockLevel],
) -> EditPreview:
    """Preview changes to a pending order.

    Schemes are evaluated as of the order's own date so the edit sees what
    was on offer when the order was placed. Paid quantities the order already
    holds are added back to available stock.
    """
    schemes = eligible_schemes(pools, distributor, order.order_date)
    paid, allocation, lines = _price_and_allocate(items, catalog, distributor.price_tier_id, schemes)
    totals = calculate_totals(lines, catalog.skus)
    stock_check = check_stock(lines, stock, carve_out=committed_quantities(order))
    delta = order_delta(totals.grand_total, order.total_amount)
    funds = check_edit_funds(delta.amount, distributor)
    has_invalid_items = any(item.quantity <= 0 for item in items)
    can_submit = bool(paid) and not has_invalid_items and not stock_check.has_issues and funds.passes
    logger.debug("Edit preview for order %s: delta %s, submit=%s", order.id, delta.amount, can_submit)
    return EditPreview(
        lines=lines,
        applied_schemes=allocation.applied_schemes,
        totals=totals,
        stock_check=stock_check,
        funds_check=funds,
        can_submit=can_submit,
        submission=_submission(paid),
        original_total=order.total_amount,
        delta=delta,
    )
