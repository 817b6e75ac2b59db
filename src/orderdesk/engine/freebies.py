"""Freebie allocation for "buy X, get Y free" schemes.

Allocation is a fixed greedy pass: for every bought SKU, schemes on that SKU
are tried from the largest buy threshold to the smallest, and each one only
sees the quantity left over by the larger thresholds before it. This is not
reward-maximising (buying 69 against thresholds 50 and 20 yields one
application of the 50 and nothing from the 20), and it must stay that way
because the backend allocates identically.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping

from .money import ZERO
from .schemes import scheme_source
from .types import AppliedScheme, DisplayLine, OrderLine, Scheme, Sku

logger = logging.getLogger(__name__)


@dataclass
class Allocation:
    free_quantities: Dict[str, int] = field(default_factory=dict)
    applied: Dict[str, AppliedScheme] = field(default_factory=dict)
    sources: Dict[str, str] = field(default_factory=dict)

    @property
    def applied_schemes(self) -> List[AppliedScheme]:
        return list(self.applied.values())

    @property
    def total_free_units(self) -> int:
        return sum(self.free_quantities.values())


def purchased_quantities(lines: Iterable) -> Dict[str, int]:
    """Sum positive paid quantities per SKU. Freebies never count as bought."""
    purchased: Dict[str, int] = {}
    for line in lines:
        if getattr(line, "is_freebie", False) or line.quantity <= 0:
            continue
        purchased[line.sku_id] = purchased.get(line.sku_id, 0) + line.quantity
    return purchased


def group_by_buy_sku(schemes: Iterable[Scheme]) -> Dict[str, List[Scheme]]:
    """Group schemes by buy SKU, each group sorted by buy quantity descending."""
    groups: Dict[str, List[Scheme]] = defaultdict(list)
    for scheme in schemes:
        groups[scheme.buy_sku_id].append(scheme)
    for group in groups.values():
        group.sort(key=lambda s: s.buy_quantity, reverse=True)
    return dict(groups)


def allocate_freebies(purchased: Mapping[str, int], schemes: Iterable[Scheme]) -> Allocation:
    allocation = Allocation()
    groups = group_by_buy_sku(schemes)

    for sku_id, quantity in purchased.items():
        group = groups.get(sku_id)
        if not group:
            continue
        remaining = quantity
        for scheme in group:
            if remaining < scheme.buy_quantity:
                continue
            times_applied = remaining // scheme.buy_quantity
            free = times_applied * scheme.get_quantity
            allocation.free_quantities[scheme.get_sku_id] = (
                allocation.free_quantities.get(scheme.get_sku_id, 0) + free
            )
            allocation.sources[scheme.get_sku_id] = scheme_source(scheme)
            remaining %= scheme.buy_quantity

            applied = allocation.applied.setdefault(scheme.id, AppliedScheme(scheme=scheme))
            applied.times_applied += times_applied
            logger.debug(
                "Scheme %s applied %dx on %s: %d free %s, %d left",
                scheme.id, times_applied, sku_id, free, scheme.get_sku_id, remaining,
            )
    return allocation


def freebie_lines(allocation: Allocation, skus: Mapping[str, Sku]) -> List[DisplayLine]:
    """Zero-priced display lines for the allocated freebies."""
    lines: List[DisplayLine] = []
    for sku_id, quantity in allocation.free_quantities.items():
        sku = skus.get(sku_id)
        if sku is None:
            logger.debug("Reward SKU %s is not in the catalog; freebie line dropped", sku_id)
            continue
        lines.append(
            DisplayLine(
                sku_id=sku.id,
                sku_name=sku.name,
                quantity=quantity,
                unit_price=ZERO,
                is_freebie=True,
                has_tier_price=False,
                scheme_source=allocation.sources.get(sku_id),
            )
        )
    return lines


def allocate_for_order_lines(lines: Iterable[OrderLine], schemes: Iterable[Scheme]) -> Allocation:
    """Replay allocation over persisted order lines (paid lines only)."""
    return allocate_freebies(purchased_quantities(lines), schemes)
