from datetime import date, datetime
from decimal import Decimal

import pytest

from conftest import make_scheme
from orderdesk.engine import (
    Distributor,
    OrderLine,
    OrderSnapshot,
    OrderStatus,
    SchemePools,
    free_unit_totals,
    orders_meeting_scheme,
    participation_count,
    sales_matrix,
    scheme_participation,
)


@pytest.fixture
def orders() -> list[OrderSnapshot]:
    return [
        OrderSnapshot(
            id="O1",
            distributor_id="D1",
            date=datetime(2024, 6, 5),
            total_amount="1180",
            status=OrderStatus.DELIVERED,
            items=[
                OrderLine(sku_id="A", quantity=10, unit_price="100"),
                OrderLine(sku_id="B", quantity=2, is_freebie=True),
            ],
        ),
        OrderSnapshot(
            id="O2",
            distributor_id="D1",
            date=datetime(2024, 7, 5),
            total_amount="590",
            status=OrderStatus.DELIVERED,
            items=[OrderLine(sku_id="A", quantity=12, unit_price="100")],
        ),
        OrderSnapshot(
            id="O3",
            distributor_id="D2",
            date=datetime(2024, 6, 6),
            total_amount="300",
            items=[OrderLine(sku_id="A", quantity=30, unit_price="10")],
        ),
    ]


@pytest.fixture
def pools() -> SchemePools:
    return SchemePools.from_schemes([make_scheme("G1", "A", 10, "B", 2)])


def test_sales_matrix_counts_delivered_orders_only(orders) -> None:
    matrix = sales_matrix(orders)

    assert set(matrix) == {"D1"}
    assert matrix["D1"]["A"].paid == 22
    assert matrix["D1"]["A"].sales_value == Decimal("2200")
    assert matrix["D1"]["B"].free == 2
    assert matrix["D1"]["B"].paid == 0


def test_free_unit_totals(orders) -> None:
    assert free_unit_totals(orders) == {"paid": 22, "free": 2}


def test_participation_is_evaluated_on_the_order_date(orders, pools) -> None:
    distributor = Distributor(id="D1", name="D1")

    june, july = orders[0], orders[1]
    assert [a.scheme.id for a in scheme_participation(june, distributor, pools)] == ["G1"]
    # the July order is outside the scheme window
    assert scheme_participation(july, distributor, pools) == []
    assert participation_count(orders, distributor, pools) == 1


def test_orders_meeting_scheme_uses_paid_quantity(orders) -> None:
    scheme = make_scheme("BIG", "A", 12, "B", 1, end_date=date(2024, 12, 31))
    # O3 reaches the threshold but is still pending
    assert [o.id for o in orders_meeting_scheme(orders, scheme)] == ["O2"]


def test_sales_matrix_date_range_is_inclusive(orders) -> None:
    june = sales_matrix(orders, start=date(2024, 6, 1), end=date(2024, 6, 5))
    assert june["D1"]["A"].paid == 10

    july = sales_matrix(orders, start=date(2024, 7, 5))
    assert july["D1"]["A"].paid == 12
    assert "B" not in july["D1"]

    assert sales_matrix(orders, end=date(2024, 6, 4)) == {}
    assert free_unit_totals(orders, start=date(2024, 7, 1)) == {"paid": 12, "free": 0}
