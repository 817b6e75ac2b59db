from decimal import Decimal

import pytest

from conftest import TODAY, make_scheme
from orderdesk.engine import (
    Distributor,
    DraftItem,
    SchemePools,
    StockLevel,
    Store,
    preview_distributor_order,
    preview_store_transfer,
    stock_map,
)


@pytest.fixture
def pools() -> SchemePools:
    return SchemePools.from_schemes([make_scheme("G1", "A", 10, "B", 2)])


def test_order_with_a_global_scheme(catalog, distributor, pools, plant_stock) -> None:
    preview = preview_distributor_order(
        [DraftItem(sku_id="A", quantity=10)], distributor, catalog, pools, plant_stock, TODAY
    )

    assert preview.totals.subtotal == Decimal("1000.00")
    assert preview.totals.gst_amount == Decimal("180.00")
    assert preview.totals.grand_total == Decimal("1180.00")

    [free] = preview.freebie_lines
    assert (free.sku_id, free.quantity, free.unit_price) == ("B", 2, 0)
    assert free.scheme_source == "Global"

    [applied] = preview.applied_schemes
    assert applied.scheme.id == "G1"
    assert applied.times_applied == 1

    assert preview.can_submit
    assert preview.submission_payload() == [{"skuId": "A", "quantity": 10}]


def test_order_blocked_when_total_exceeds_wallet_and_credit(catalog, pools, plant_stock) -> None:
    distributor = Distributor(id="D2", name="Small", wallet_balance="500", credit_limit="400")

    preview = preview_distributor_order(
        [DraftItem(sku_id="A", quantity=10)], distributor, catalog, pools, plant_stock, TODAY
    )

    assert not preview.funds_check.passes
    assert not preview.can_submit


def test_order_blocked_by_stock_shortfall(catalog, distributor, pools) -> None:
    stock = stock_map([StockLevel(sku_id="A", quantity=100), StockLevel(sku_id="B", quantity=1)])

    preview = preview_distributor_order(
        [DraftItem(sku_id="A", quantity=10)], distributor, catalog, pools, stock, TODAY
    )

    assert preview.stock_check.issues == ("Besan 1kg: Required 2, Available 1",)
    assert not preview.can_submit


def test_tier_price_applies_to_distributor_orders(catalog, pools, plant_stock) -> None:
    gold = Distributor(id="D3", name="Gold", wallet_balance="5000", price_tier_id="GOLD")

    preview = preview_distributor_order(
        [DraftItem(sku_id="A", quantity=10)], gold, catalog, pools, plant_stock, TODAY
    )

    [paid] = preview.paid_lines
    assert paid.unit_price == Decimal("90")
    assert paid.has_tier_price
    assert preview.totals.grand_total == Decimal("1062.00")


def test_empty_draft_cannot_submit(catalog, distributor, pools, plant_stock) -> None:
    preview = preview_distributor_order(
        [DraftItem(sku_id="A", quantity=0)], distributor, catalog, pools, plant_stock, TODAY
    )

    assert preview.lines == []
    assert preview.totals.grand_total == Decimal("0.00")
    assert not preview.can_submit


def test_expired_scheme_gives_no_freebies(catalog, distributor, pools, plant_stock) -> None:
    later = TODAY.replace(month=8)

    preview = preview_distributor_order(
        [DraftItem(sku_id="A", quantity=10)], distributor, catalog, pools, plant_stock, later
    )

    assert preview.freebie_lines == []
    assert preview.applied_schemes == []


def test_store_transfer_uses_base_price_without_gst(catalog, plant_stock) -> None:
    pools = SchemePools.from_schemes(
        [
            make_scheme("G1", "A", 10, "B", 2),
            make_scheme("S1", "A", 10, "C", 5, store_id="ST1"),
        ]
    )
    store = Store(id="ST1", name="Depot", wallet_balance="1000")

    preview = preview_store_transfer([DraftItem(sku_id="A", quantity=10)], store, catalog, pools, plant_stock, TODAY)

    assert preview.totals.subtotal == Decimal("1000.00")
    assert preview.totals.gst_amount == Decimal("0.00")
    assert preview.totals.grand_total == Decimal("1000.00")
    assert [line.sku_id for line in preview.freebie_lines] == ["B"]
    assert preview.can_submit


def test_store_transfer_limited_to_wallet(catalog, plant_stock) -> None:
    store = Store(id="ST1", name="Depot", wallet_balance="999.99")

    preview = preview_store_transfer(
        [DraftItem(sku_id="A", quantity=10)], store, catalog, SchemePools(), plant_stock, TODAY
    )

    assert not preview.funds_check.passes
    assert not preview.can_submit
