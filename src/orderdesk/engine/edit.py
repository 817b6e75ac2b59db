"""Edit-mode reconciliation between a recalculated draft and the persisted order."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from .money import ZERO, d, round_money
from .types import DraftItem, OrderSnapshot


class DeltaDirection(str, enum.Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class EditDelta:
    amount: Decimal
    direction: DeltaDirection

    @property
    def is_increase(self) -> bool:
        return self.direction is DeltaDirection.INCREASE


def order_delta(grand_total: Decimal, original_total: Decimal) -> EditDelta:
    amount = round_money(d(grand_total) - d(original_total))
    if amount > ZERO:
        direction = DeltaDirection.INCREASE
    elif amount < ZERO:
        direction = DeltaDirection.DECREASE
    else:
        direction = DeltaDirection.UNCHANGED
    return EditDelta(amount=amount, direction=direction)


def committed_quantities(order: OrderSnapshot) -> Dict[str, int]:
    """Paid quantities the order already holds per SKU. Freebie lines are left out."""
    committed: Dict[str, int] = {}
    for line in order.paid_lines:
        committed[line.sku_id] = committed.get(line.sku_id, 0) + line.quantity
    return committed


def draft_from_order(order: OrderSnapshot) -> List[DraftItem]:
    return [DraftItem(sku_id=line.sku_id, quantity=line.quantity) for line in order.paid_lines]
