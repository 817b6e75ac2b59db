from __future__ import annotations

from typing import Iterable, Mapping

from .money import HUNDRED, ZERO, round_money
from .types import DisplayLine, OrderTotals, Sku


def calculate_totals(
    lines: Iterable[DisplayLine],
    skus: Mapping[str, Sku],
    *,
    apply_gst: bool = True,
) -> OrderTotals:
    """Subtotal, GST and grand total over paid lines.

    Freebie lines contribute nothing. Internal store transfers pass
    ``apply_gst=False``: their total is the value of goods alone.
    Components are rounded half-up to paise and the grand total is their sum.
    """
    subtotal = ZERO
    gst = ZERO
    for line in lines:
        if line.is_freebie:
            continue
        line_subtotal = line.quantity * line.unit_price
        subtotal += line_subtotal
        if apply_gst:
            sku = skus.get(line.sku_id)
            if sku is not None:
                gst += line_subtotal * sku.gst_percentage / HUNDRED

    subtotal = round_money(subtotal)
    gst = round_money(gst)
    return OrderTotals(subtotal=subtotal, gst_amount=gst, grand_total=subtotal + gst)
