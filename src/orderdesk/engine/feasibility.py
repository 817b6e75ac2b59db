"""Stock and funds checks for a draft order.

Both checks are advisory. Shortfalls come back as data so the caller can
disable submission; the backend remains the only authority on admission.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from .money import ZERO, d, round_money
from .types import DisplayLine, Distributor, FundsCheck, StockCheck, StockLevel, Store


def required_quantities(lines: Iterable[DisplayLine]) -> Dict[str, int]:
    """Paid plus free quantity per SKU."""
    required: Dict[str, int] = {}
    for line in lines:
        required[line.sku_id] = required.get(line.sku_id, 0) + line.quantity
    return required


def check_stock(
    lines: Iterable[DisplayLine],
    stock: Mapping[str, StockLevel],
    carve_out: Optional[Mapping[str, int]] = None,
) -> StockCheck:
    """Compare required quantities with stock available at the source location.

    ``carve_out`` holds quantities already reserved for the order being
    edited; they count as available to that same order.
    """
    lines = list(lines)
    names = {line.sku_id: line.sku_name for line in lines}
    carve_out = carve_out or {}
    issues: List[str] = []
    for sku_id, quantity in required_quantities(lines).items():
        level = stock.get(sku_id)
        available = level.available if level is not None else 0
        available += carve_out.get(sku_id, 0)
        if quantity > available:
            issues.append(f"{names.get(sku_id, sku_id)}: Required {quantity}, Available {available}")
    return StockCheck(issues=tuple(issues))


def check_distributor_funds(grand_total: Decimal, distributor: Distributor) -> FundsCheck:
    available = distributor.available_funds
    passes = grand_total <= available
    message = None
    if not passes:
        message = (
            f"Insufficient funds. Order total is {grand_total}, "
            f"but available funds are {available}."
        )
    return FundsCheck(passes=passes, required=grand_total, available=available, message=message)


def check_store_funds(grand_total: Decimal, store: Store) -> FundsCheck:
    """Store transfers draw on the store wallet alone; stores have no credit line."""
    available = store.wallet_balance
    passes = grand_total <= available
    message = None
    if not passes:
        message = "The total amount exceeds the available wallet balance for this account."
    return FundsCheck(passes=passes, required=grand_total, available=available, message=message)


def check_edit_funds(delta: Decimal, distributor: Distributor) -> FundsCheck:
    """Funds check for an edit, driven by the change in order value.

    A decrease never blocks. An increase must fit in wallet plus credit, and
    when it cannot be covered by the wallet alone (or the wallet is already
    negative) the caller has to confirm the draw on credit.
    """
    delta = d(delta)
    wallet = distributor.wallet_balance
    available = distributor.available_funds
    if delta <= ZERO:
        return FundsCheck(passes=True, required=delta, available=available)

    if delta > available:
        return FundsCheck(
            passes=False,
            required=delta,
            available=available,
            message="The increase in order value exceeds the available funds (wallet + credit limit).",
        )

    if wallet < ZERO or delta > wallet:
        credit_draw = round_money(max(ZERO, delta - max(ZERO, wallet)))
        return FundsCheck(
            passes=True,
            required=delta,
            available=available,
            needs_credit_confirmation=True,
            credit_draw=credit_draw,
            message=(
                f"The order change of {delta} (incl. GST) cannot be fully covered by the "
                f"current wallet balance of {wallet}. This will use an additional "
                f"{credit_draw} from the credit limit."
            ),
        )
    return FundsCheck(passes=True, required=delta, available=available)
