"""Snapshot files: import them into the database or price a draft straight from memory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError
from sqlmodel import Session

from . import crud, engine, models
from .schemas.snapshot import PreviewFile, SnapshotFile

logger = logging.getLogger(__name__)

SnapshotT = TypeVar("SnapshotT", bound=BaseModel)


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be read or does not describe a preview."""


def read_snapshot(path: Path, model: Type[SnapshotT] = SnapshotFile) -> SnapshotT:
    try:
        return model.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SnapshotError(f"Cannot read {path}: {exc}") from exc
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot {path}: {exc}") from exc


def load_into_database(db: Session, snapshot: SnapshotFile) -> Dict[str, int]:
    """Create every record in dependency order and return per-kind counts."""

    for sku in snapshot.skus:
        crud.create_sku(db, sku)
    for tier in snapshot.price_tiers:
        crud.create_price_tier(db, tier)
    for store in snapshot.stores:
        crud.create_store(db, store)
    for distributor in snapshot.distributors:
        crud.create_distributor(db, distributor)
    for scheme in snapshot.schemes:
        crud.create_scheme(db, scheme)
    stock_rows = 0
    for location_id, levels in snapshot.stock.items():
        for level in levels:
            crud.upsert_stock(db, location_id, level)
            stock_rows += 1
    for order in snapshot.orders:
        crud.create_order(db, order)

    counts = {
        "skus": len(snapshot.skus),
        "price_tiers": len(snapshot.price_tiers),
        "stores": len(snapshot.stores),
        "distributors": len(snapshot.distributors),
        "schemes": len(snapshot.schemes),
        "stock": stock_rows,
        "orders": len(snapshot.orders),
    }
    logger.info("Loaded snapshot: %s", counts)
    return counts


@dataclass(frozen=True)
class EngineInputs:
    catalog: engine.Catalog
    pools: engine.SchemePools
    distributors: Dict[str, engine.Distributor]
    stores: Dict[str, engine.Store]
    stock: Dict[str, Dict[str, engine.StockLevel]]
    orders: Dict[str, engine.OrderSnapshot]


def build_engine_inputs(snapshot: SnapshotFile) -> EngineInputs:
    skus = [
        engine.Sku(id=s.sku_id, name=s.name, price=s.price, gst_percentage=s.gst_percentage, hsn_code=s.hsn_code)
        for s in snapshot.skus
    ]
    tier_items = [
        engine.PriceTierItem(tier_id=tier.tier_id, sku_id=item.sku_id, price=item.price)
        for tier in snapshot.price_tiers
        for item in tier.items
    ]
    schemes = [crud.to_engine_scheme(models.Scheme(**s.model_dump())) for s in snapshot.schemes]
    distributors = {
        d.distributor_id: crud.to_engine_distributor(models.Distributor(**d.model_dump()))
        for d in snapshot.distributors
    }
    stores = {s.store_id: engine.Store(id=s.store_id, name=s.name, wallet_balance=s.wallet_balance) for s in snapshot.stores}
    stock = {
        location_id: engine.stock_map(
            engine.StockLevel(sku_id=level.sku_id, quantity=level.quantity, reserved=level.reserved)
            for level in levels
        )
        for location_id, levels in snapshot.stock.items()
    }
    orders = {
        o.order_id: engine.OrderSnapshot(
            id=o.order_id,
            distributor_id=o.distributor_id,
            date=o.placed_at,
            total_amount=o.total_amount,
            items=tuple(
                engine.OrderLine(
                    sku_id=i.sku_id, quantity=i.quantity, unit_price=i.unit_price, is_freebie=i.is_freebie
                )
                for i in o.items
            ),
            status=engine.OrderStatus(o.status),
        )
        for o in snapshot.orders
    }
    return EngineInputs(
        catalog=engine.Catalog.from_lists(skus, tier_items),
        pools=engine.SchemePools.from_schemes(schemes),
        distributors=distributors,
        stores=stores,
        stock=stock,
        orders=orders,
    )


def preview_from_file(preview: PreviewFile, today: date) -> engine.OrderPreview:
    """Run the flow selected by ``preview`` entirely in memory."""

    selected = [k for k in ("distributor_id", "store_id", "order_id") if getattr(preview, k)]
    if len(selected) != 1:
        raise SnapshotError("Set exactly one of distributor_id, store_id or order_id")

    inputs = build_engine_inputs(preview)
    items = [engine.DraftItem(sku_id=i.sku_id, quantity=i.quantity) for i in preview.items]
    as_of = preview.as_of or today

    if preview.order_id:
        order = inputs.orders.get(preview.order_id)
        if order is None:
            raise SnapshotError(f"Order {preview.order_id} is not in the snapshot")
        distributor = _lookup(inputs.distributors, order.distributor_id, "Distributor")
        stock = inputs.stock.get(distributor.stock_location, {})
        return engine.preview_order_edit(items, order, distributor, inputs.catalog, inputs.pools, stock)

    if preview.store_id:
        store = _lookup(inputs.stores, preview.store_id, "Store")
        stock = inputs.stock.get(engine.PLANT_LOCATION, {})
        return engine.preview_store_transfer(items, store, inputs.catalog, inputs.pools, stock, as_of)

    distributor = _lookup(inputs.distributors, preview.distributor_id, "Distributor")
    stock = inputs.stock.get(distributor.stock_location, {})
    return engine.preview_distributor_order(items, distributor, inputs.catalog, inputs.pools, stock, as_of)


def _lookup(mapping, key, label):
    try:
        return mapping[key]
    except KeyError as exc:
        raise SnapshotError(f"{label} {key} is not in the snapshot") from exc
