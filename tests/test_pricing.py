from decimal import Decimal

from orderdesk.engine import DraftItem, PriceTierItem, build_tier_price_map, resolve_unit_price
from orderdesk.engine.pricing import price_draft_lines


def test_tier_override_wins_over_base_price(catalog, sku_map) -> None:
    prices = catalog.tier_prices("GOLD")

    resolved = resolve_unit_price(sku_map["A"], prices)
    assert resolved.unit_price == Decimal("90")
    assert resolved.is_tier_price is True

    fallback = resolve_unit_price(sku_map["B"], prices)
    assert fallback.unit_price == Decimal("50")
    assert fallback.is_tier_price is False


def test_tier_map_is_empty_without_a_tier() -> None:
    items = [PriceTierItem(tier_id="GOLD", sku_id="A", price="90")]
    assert build_tier_price_map(items, None) == {}
    assert build_tier_price_map(items, "") == {}
    assert build_tier_price_map(items, "BRONZE") == {}


def test_tier_map_only_reads_its_own_tier(catalog) -> None:
    assert catalog.tier_prices("SILVER") == {"A": Decimal("95")}


def test_draft_lines_skip_unknown_skus_and_empty_quantities(catalog) -> None:
    items = [
        DraftItem(sku_id="A", quantity=3),
        DraftItem(sku_id="ZZZ", quantity=5),
        DraftItem(sku_id="B", quantity=0),
        DraftItem(sku_id="C", quantity=-2),
    ]
    lines = price_draft_lines(items, catalog.skus, catalog.tier_prices("GOLD"))

    assert [line.sku_id for line in lines] == ["A"]
    line = lines[0]
    assert line.unit_price == Decimal("90")
    assert line.has_tier_price is True
    assert line.is_freebie is False
    assert line.line_total == Decimal("270")


def test_transfers_ignore_tier_prices(catalog) -> None:
    lines = price_draft_lines(
        [DraftItem(sku_id="A", quantity=1)],
        catalog.skus,
        catalog.tier_prices("GOLD"),
        use_tier_prices=False,
    )
    assert lines[0].unit_price == Decimal("100")
    assert lines[0].has_tier_price is False
