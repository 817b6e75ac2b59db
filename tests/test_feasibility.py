from decimal import Decimal

from orderdesk.engine import (
    DisplayLine,
    Distributor,
    StockLevel,
    Store,
    check_distributor_funds,
    check_edit_funds,
    check_stock,
    check_store_funds,
    stock_map,
)


def _line(sku_id: str, quantity: int, *, free: bool = False) -> DisplayLine:
    return DisplayLine(sku_id=sku_id, sku_name=f"SKU {sku_id}", quantity=quantity, unit_price=Decimal("1"), is_freebie=free)


def test_paid_and_free_quantities_both_need_stock(plant_stock) -> None:
    # B: 100 on hand, 95 paid + 10 free
    check = check_stock([_line("B", 95), _line("B", 10, free=True)], plant_stock)

    assert check.has_issues
    assert check.issues == ("SKU B: Required 105, Available 100",)


def test_reserved_stock_is_not_available(plant_stock) -> None:
    check = check_stock([_line("A", 481)], plant_stock)
    assert check.issues == ("SKU A: Required 481, Available 480",)

    assert not check_stock([_line("A", 480)], plant_stock).has_issues


def test_missing_stock_record_counts_as_zero() -> None:
    check = check_stock([_line("Q", 1)], {})
    assert check.issues == ("SKU Q: Required 1, Available 0",)


def test_edit_carve_out_counts_order_quantities_as_available() -> None:
    stock = stock_map([StockLevel(sku_id="X", quantity=10, reserved=10)])

    assert check_stock([_line("X", 10)], stock).has_issues
    assert not check_stock([_line("X", 10)], stock, carve_out={"X": 10}).has_issues
    assert check_stock([_line("X", 11)], stock, carve_out={"X": 10}).has_issues


def test_distributor_funds_include_credit(distributor) -> None:
    assert check_distributor_funds(Decimal("6000"), distributor).passes

    blocked = check_distributor_funds(Decimal("6000.01"), distributor)
    assert not blocked.passes
    assert blocked.available == Decimal("6000")
    assert blocked.message == "Insufficient funds. Order total is 6000.01, but available funds are 6000."


def test_store_funds_use_wallet_only() -> None:
    store = Store(id="ST1", name="Depot", wallet_balance="500")

    assert check_store_funds(Decimal("500"), store).passes
    blocked = check_store_funds(Decimal("500.01"), store)
    assert not blocked.passes
    assert blocked.message == "The total amount exceeds the available wallet balance for this account."


def test_edit_decrease_never_blocks() -> None:
    broke = Distributor(id="D", name="D", wallet_balance="-900", credit_limit="0")

    check = check_edit_funds(Decimal("-250"), broke)
    assert check.passes
    assert not check.needs_credit_confirmation
    assert check.message is None


def test_edit_increase_within_wallet_needs_no_confirmation(distributor) -> None:
    check = check_edit_funds(Decimal("200"), distributor)
    assert check.passes
    assert not check.needs_credit_confirmation


def test_edit_increase_beyond_wallet_asks_to_confirm_credit() -> None:
    distributor = Distributor(id="D", name="D", wallet_balance="100", credit_limit="500")

    check = check_edit_funds(Decimal("300"), distributor)

    assert check.passes
    assert check.needs_credit_confirmation
    assert check.credit_draw == Decimal("200.00")
    assert "200.00" in check.message


def test_edit_increase_with_negative_wallet_draws_all_from_credit() -> None:
    distributor = Distributor(id="D", name="D", wallet_balance="-50", credit_limit="500")

    check = check_edit_funds(Decimal("100"), distributor)

    assert check.passes
    assert check.needs_credit_confirmation
    assert check.credit_draw == Decimal("100.00")


def test_edit_increase_beyond_wallet_and_credit_blocks() -> None:
    distributor = Distributor(id="D", name="D", wallet_balance="100", credit_limit="100")

    check = check_edit_funds(Decimal("200.01"), distributor)

    assert not check.passes
    assert check.message == "The increase in order value exceeds the available funds (wallet + credit limit)."
