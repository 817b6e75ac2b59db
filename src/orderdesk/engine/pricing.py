"""Unit price resolution: a tier override wins, otherwise the SKU base price."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from .types import DisplayLine, DraftItem, PriceTierItem, Sku

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedPrice:
    unit_price: Decimal
    is_tier_price: bool


def build_tier_price_map(tier_items: Iterable[PriceTierItem], tier_id: Optional[str]) -> Dict[str, Decimal]:
    """Return ``sku_id -> override price`` for one tier (empty without a tier)."""
    if not tier_id:
        return {}
    return {item.sku_id: item.price for item in tier_items if item.tier_id == tier_id}


def resolve_unit_price(sku: Sku, tier_prices: Mapping[str, Decimal]) -> ResolvedPrice:
    override = tier_prices.get(sku.id)
    if override is not None:
        return ResolvedPrice(unit_price=override, is_tier_price=True)
    return ResolvedPrice(unit_price=sku.price, is_tier_price=False)


def price_draft_lines(
    items: Iterable[DraftItem],
    skus: Mapping[str, Sku],
    tier_prices: Optional[Mapping[str, Decimal]] = None,
    *,
    use_tier_prices: bool = True,
) -> List[DisplayLine]:
    """Build paid display lines for the requested items.

    Lines referencing an unknown SKU, or with a non-positive quantity, are
    dropped so that one bad row does not hide the rest of the preview.
    """
    prices = tier_prices if (use_tier_prices and tier_prices) else {}
    lines: List[DisplayLine] = []
    for item in items:
        sku = skus.get(item.sku_id)
        if sku is None:
            logger.debug("Skipping draft line for unknown SKU %s", item.sku_id)
            continue
        if item.quantity <= 0:
            continue
        resolved = resolve_unit_price(sku, prices)
        lines.append(
            DisplayLine(
                sku_id=sku.id,
                sku_name=sku.name,
                quantity=item.quantity,
                unit_price=resolved.unit_price,
                is_freebie=False,
                has_tier_price=resolved.is_tier_price,
            )
        )
    return lines
