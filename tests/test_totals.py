from decimal import Decimal

from orderdesk.engine import DisplayLine, calculate_totals, round_money


def _line(sku_id: str, quantity: int, price: str, *, free: bool = False) -> DisplayLine:
    return DisplayLine(
        sku_id=sku_id,
        sku_name=sku_id,
        quantity=quantity,
        unit_price=Decimal("0") if free else Decimal(price),
        is_freebie=free,
    )


def test_gst_is_charged_per_line_rate(sku_map) -> None:
    totals = calculate_totals([_line("A", 10, "100"), _line("B", 2, "50")], sku_map)

    assert totals.subtotal == Decimal("1100.00")
    # 18% of 1000 plus 5% of 100
    assert totals.gst_amount == Decimal("185.00")
    assert totals.grand_total == Decimal("1285.00")


def test_freebie_lines_add_nothing(sku_map) -> None:
    totals = calculate_totals([_line("A", 10, "100"), _line("B", 2, "50", free=True)], sku_map)

    assert totals.subtotal == Decimal("1000.00")
    assert totals.gst_amount == Decimal("180.00")
    assert totals.grand_total == Decimal("1180.00")


def test_transfers_carry_no_gst(sku_map) -> None:
    totals = calculate_totals([_line("A", 10, "100")], sku_map, apply_gst=False)

    assert totals.gst_amount == Decimal("0.00")
    assert totals.grand_total == totals.subtotal == Decimal("1000.00")


def test_grand_total_is_the_sum_of_rounded_parts(sku_map) -> None:
    # 3 x 33.33 = 99.99 at 18% -> 17.9982
    totals = calculate_totals([_line("A", 3, "33.33")], sku_map)

    assert totals.subtotal == Decimal("99.99")
    assert totals.gst_amount == Decimal("18.00")
    assert totals.grand_total == totals.subtotal + totals.gst_amount


def test_empty_order_totals_zero(sku_map) -> None:
    totals = calculate_totals([], sku_map)
    assert totals.grand_total == Decimal("0.00")


def test_round_money_rounds_half_up() -> None:
    assert round_money("0.005") == Decimal("0.01")
    assert round_money("2.345") == Decimal("2.35")
    assert round_money(None) == Decimal("0.00")
