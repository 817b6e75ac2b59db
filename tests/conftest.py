from collections.abc import Generator
from datetime import date
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine

from orderdesk import engine
from orderdesk.config import get_settings
from orderdesk.database import get_engine
from orderdesk.dependencies import get_db

TODAY = date(2024, 6, 15)


def make_scheme(scheme_id: str, buy_sku: str, buy_qty: int, get_sku: str, get_qty: int, **overrides) -> engine.Scheme:
    fields = dict(
        id=scheme_id,
        description=f"Buy {buy_qty} {buy_sku} get {get_qty} {get_sku}",
        buy_sku_id=buy_sku,
        buy_quantity=buy_qty,
        get_sku_id=get_sku,
        get_quantity=get_qty,
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 30),
    )
    fields.update(overrides)
    if not any(fields.get(k) for k in ("is_global", "store_id", "distributor_id")):
        fields["is_global"] = True
    return engine.Scheme(**fields)


@pytest.fixture
def skus() -> list[engine.Sku]:
    return [
        engine.Sku(id="A", name="Atta 5kg", price="100", gst_percentage="18", hsn_code="1101"),
        engine.Sku(id="B", name="Besan 1kg", price="50", gst_percentage="5", hsn_code="1106"),
        engine.Sku(id="C", name="Chana 1kg", price="80", gst_percentage="0", hsn_code="0713"),
    ]


@pytest.fixture
def catalog(skus) -> engine.Catalog:
    return engine.Catalog.from_lists(
        skus,
        [
            engine.PriceTierItem(tier_id="GOLD", sku_id="A", price="90"),
            engine.PriceTierItem(tier_id="SILVER", sku_id="A", price="95"),
        ],
    )


@pytest.fixture
def sku_map(catalog) -> dict[str, engine.Sku]:
    return dict(catalog.skus)


@pytest.fixture
def distributor() -> engine.Distributor:
    return engine.Distributor(id="D1", name="Sharma Traders", wallet_balance="5000", credit_limit="1000")


@pytest.fixture
def plant_stock() -> dict[str, engine.StockLevel]:
    return engine.stock_map(
        [
            engine.StockLevel(sku_id="A", quantity=500, reserved=20),
            engine.StockLevel(sku_id="B", quantity=100, reserved=0),
            engine.StockLevel(sku_id="C", quantity=10, reserved=10),
        ]
    )


@pytest.fixture(name="db_engine")
def db_engine_fixture(tmp_path, monkeypatch) -> Generator[Any, None, None]:
    monkeypatch.setenv("ORDERDESK_DB", str(tmp_path / "test.sqlite3"))
    get_settings.cache_clear()
    get_engine.cache_clear()
    test_engine = create_engine(get_settings().database_url, connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    get_settings.cache_clear()
    get_engine.cache_clear()


@pytest.fixture(name="client")
def client_fixture(db_engine):  # type: ignore[annotations]
    from orderdesk.app import create_app

    app = create_app()

    def get_db_override() -> Generator[Session, None, None]:
        with Session(db_engine) as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    app.dependency_overrides[get_db] = get_db_override

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
