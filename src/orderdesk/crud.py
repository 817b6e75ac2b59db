"""Database access helpers and engine snapshot assembly."""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from . import engine, models
from .schemas import catalog, inventory, order, partner, scheme


class DuplicateRecordError(RuntimeError):
    """Raised when trying to create a record with an existing identifier."""


class RecordNotFoundError(LookupError):
    """Raised when a referenced record does not exist."""


def _commit(db: Session, instance, label: str):
    db.add(instance)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateRecordError(f"{label} already exists") from exc
    db.refresh(instance)
    return instance


# Catalog


def get_sku(db: Session, sku_id: str) -> Optional[models.SKU]:
    return db.exec(select(models.SKU).where(models.SKU.sku_id == sku_id)).first()


def list_skus(db: Session, *, skip: int = 0, limit: int = 50) -> List[models.SKU]:
    return list(db.exec(select(models.SKU).order_by(models.SKU.sku_id).offset(skip).limit(limit)))


def create_sku(db: Session, payload: catalog.SKUCreate) -> models.SKU:
    if get_sku(db, payload.sku_id):
        raise DuplicateRecordError(f"SKU '{payload.sku_id}' already exists")
    return _commit(db, models.SKU(**payload.model_dump()), f"SKU '{payload.sku_id}'")


def get_price_tier(db: Session, tier_id: str) -> Optional[models.PriceTier]:
    return db.exec(select(models.PriceTier).where(models.PriceTier.tier_id == tier_id)).first()


def list_price_tiers(db: Session) -> List[models.PriceTier]:
    return list(db.exec(select(models.PriceTier).order_by(models.PriceTier.tier_id)))


def list_tier_items(db: Session, tier_id: Optional[str] = None) -> List[models.PriceTierItem]:
    statement = select(models.PriceTierItem)
    if tier_id:
        statement = statement.where(models.PriceTierItem.tier_id == tier_id)
    return list(db.exec(statement))


def create_price_tier(db: Session, payload: catalog.PriceTierCreate) -> models.PriceTier:
    if get_price_tier(db, payload.tier_id):
        raise DuplicateRecordError(f"Price tier '{payload.tier_id}' already exists")
    for item in payload.items:
        if not get_sku(db, item.sku_id):
            raise RecordNotFoundError(f"SKU {item.sku_id} not found")
    tier = models.PriceTier(tier_id=payload.tier_id, name=payload.name, description=payload.description)
    db.add(tier)
    for item in payload.items:
        db.add(models.PriceTierItem(tier_id=payload.tier_id, sku_id=item.sku_id, price=item.price))
    return _commit(db, tier, f"Price tier '{payload.tier_id}'")


def set_tier_price(db: Session, tier_id: str, payload: catalog.TierPricePayload) -> models.PriceTierItem:
    """Create or replace the override for one SKU in a tier."""

    if not get_price_tier(db, tier_id):
        raise RecordNotFoundError("Price tier not found")
    if not get_sku(db, payload.sku_id):
        raise RecordNotFoundError(f"SKU {payload.sku_id} not found")
    statement = select(models.PriceTierItem).where(
        models.PriceTierItem.tier_id == tier_id, models.PriceTierItem.sku_id == payload.sku_id
    )
    item = db.exec(statement).first() or models.PriceTierItem(tier_id=tier_id, sku_id=payload.sku_id, price=0.0)
    item.price = payload.price
    return _commit(db, item, "Tier price")


# Stores and distributors


def get_store(db: Session, store_id: str) -> Optional[models.Store]:
    return db.exec(select(models.Store).where(models.Store.store_id == store_id)).first()


def list_stores(db: Session) -> List[models.Store]:
    return list(db.exec(select(models.Store).order_by(models.Store.store_id)))


def create_store(db: Session, payload: partner.StoreCreate) -> models.Store:
    if get_store(db, payload.store_id):
        raise DuplicateRecordError(f"Store '{payload.store_id}' already exists")
    return _commit(db, models.Store(**payload.model_dump()), f"Store '{payload.store_id}'")


def get_distributor(db: Session, distributor_id: str) -> Optional[models.Distributor]:
    statement = select(models.Distributor).where(models.Distributor.distributor_id == distributor_id)
    return db.exec(statement).first()


def list_distributors(db: Session, *, skip: int = 0, limit: int = 50) -> List[models.Distributor]:
    statement = select(models.Distributor).order_by(models.Distributor.distributor_id).offset(skip).limit(limit)
    return list(db.exec(statement))


def _check_distributor_refs(db: Session, price_tier_id: Optional[str], store_id: Optional[str]) -> None:
    if price_tier_id and not get_price_tier(db, price_tier_id):
        raise RecordNotFoundError(f"Price tier {price_tier_id} not found")
    if store_id and not get_store(db, store_id):
        raise RecordNotFoundError(f"Store {store_id} not found")


def create_distributor(db: Session, payload: partner.DistributorCreate) -> models.Distributor:
    if get_distributor(db, payload.distributor_id):
        raise DuplicateRecordError(f"Distributor '{payload.distributor_id}' already exists")
    _check_distributor_refs(db, payload.price_tier_id, payload.store_id)
    return _commit(db, models.Distributor(**payload.model_dump()), f"Distributor '{payload.distributor_id}'")


def update_distributor(
    db: Session, distributor: models.Distributor, payload: partner.DistributorUpdate
) -> models.Distributor:
    update_data = payload.model_dump(exclude_unset=True)
    _check_distributor_refs(db, update_data.get("price_tier_id"), update_data.get("store_id"))
    for key, value in update_data.items():
        setattr(distributor, key, value)
    db.add(distributor)
    db.commit()
    db.refresh(distributor)
    return distributor


# Schemes


def get_scheme(db: Session, scheme_id: str) -> Optional[models.Scheme]:
    return db.exec(select(models.Scheme).where(models.Scheme.scheme_id == scheme_id)).first()


def list_schemes(
    db: Session,
    *,
    store_id: Optional[str] = None,
    distributor_id: Optional[str] = None,
    global_only: bool = False,
) -> List[models.Scheme]:
    statement = select(models.Scheme)
    if global_only:
        statement = statement.where(models.Scheme.is_global == True)  # noqa: E712
    if store_id:
        statement = statement.where(models.Scheme.store_id == store_id)
    if distributor_id:
        statement = statement.where(models.Scheme.distributor_id == distributor_id)
    return list(db.exec(statement.order_by(models.Scheme.start_date, models.Scheme.scheme_id)))


def create_scheme(db: Session, payload: scheme.SchemeCreate) -> models.Scheme:
    """Persist a scheme after checking its scope and references.

    Raises :class:`engine.InvalidSchemeError` when the scope is ambiguous.
    """

    if get_scheme(db, payload.scheme_id):
        raise DuplicateRecordError(f"Scheme '{payload.scheme_id}' already exists")
    if payload.end_date < payload.start_date:
        raise engine.InvalidSchemeError("Scheme end date is before its start date")
    row = models.Scheme(**payload.model_dump())
    to_engine_scheme(row)
    for sku_id in {payload.buy_sku_id, payload.get_sku_id}:
        if not get_sku(db, sku_id):
            raise RecordNotFoundError(f"SKU {sku_id} not found")
    if payload.store_id and not get_store(db, payload.store_id):
        raise RecordNotFoundError(f"Store {payload.store_id} not found")
    if payload.distributor_id and not get_distributor(db, payload.distributor_id):
        raise RecordNotFoundError(f"Distributor {payload.distributor_id} not found")
    return _commit(db, row, f"Scheme '{payload.scheme_id}'")


def stop_scheme(db: Session, row: models.Scheme, payload: scheme.SchemeStop) -> models.Scheme:
    """Terminate a scheme early. A stopped scheme is never active again."""

    row.stopped_by = payload.stopped_by
    row.stopped_date = payload.stopped_date or date.today()
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


# Stock


def list_stock(db: Session, location_id: str) -> List[models.StockItem]:
    statement = select(models.StockItem).where(models.StockItem.location_id == location_id)
    return list(db.exec(statement.order_by(models.StockItem.sku_id)))


def upsert_stock(db: Session, location_id: str, payload: inventory.StockLevelPayload) -> models.StockItem:
    if not get_sku(db, payload.sku_id):
        raise RecordNotFoundError(f"SKU {payload.sku_id} not found")
    statement = select(models.StockItem).where(
        models.StockItem.location_id == location_id, models.StockItem.sku_id == payload.sku_id
    )
    item = db.exec(statement).first() or models.StockItem(location_id=location_id, sku_id=payload.sku_id)
    item.quantity = payload.quantity
    item.reserved = payload.reserved
    item.updated_at = datetime.utcnow()
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


# Orders


def get_order(db: Session, order_id: str) -> Optional[models.Order]:
    return db.exec(select(models.Order).where(models.Order.order_id == order_id)).first()


def list_order_items(db: Session, order_id: str) -> List[models.OrderItem]:
    return list(db.exec(select(models.OrderItem).where(models.OrderItem.order_id == order_id)))


def list_orders(
    db: Session, *, distributor_id: Optional[str] = None, status: Optional[str] = None
) -> List[models.Order]:
    statement = select(models.Order)
    if distributor_id:
        statement = statement.where(models.Order.distributor_id == distributor_id)
    if status:
        statement = statement.where(models.Order.status == status)
    return list(db.exec(statement.order_by(models.Order.placed_at)))


def create_order(db: Session, payload: order.OrderCreate) -> models.Order:
    """Import an order as persisted by the backend, freebie lines included."""

    if get_order(db, payload.order_id):
        raise DuplicateRecordError(f"Order '{payload.order_id}' already exists")
    if not get_distributor(db, payload.distributor_id):
        raise RecordNotFoundError(f"Distributor {payload.distributor_id} not found")
    for item in payload.items:
        if not get_sku(db, item.sku_id):
            raise RecordNotFoundError(f"SKU {item.sku_id} not found")
    row = models.Order(**payload.model_dump(exclude={"items"}))
    db.add(row)
    for item in payload.items:
        db.add(models.OrderItem(order_id=payload.order_id, **item.model_dump()))
    return _commit(db, row, f"Order '{payload.order_id}'")


# Engine snapshots


def to_engine_scheme(row: models.Scheme) -> engine.Scheme:
    return engine.Scheme(
        id=row.scheme_id,
        description=row.description,
        buy_sku_id=row.buy_sku_id,
        buy_quantity=row.buy_quantity,
        get_sku_id=row.get_sku_id,
        get_quantity=row.get_quantity,
        start_date=row.start_date,
        end_date=row.end_date,
        is_global=row.is_global,
        store_id=row.store_id,
        distributor_id=row.distributor_id,
        stopped_date=row.stopped_date,
        stopped_by=row.stopped_by,
    )


def to_engine_distributor(row: models.Distributor) -> engine.Distributor:
    return engine.Distributor(
        id=row.distributor_id,
        name=row.name,
        wallet_balance=row.wallet_balance,
        credit_limit=row.credit_limit,
        price_tier_id=row.price_tier_id,
        store_id=row.store_id,
        has_special_schemes=row.has_special_schemes,
    )


def to_engine_store(row: models.Store) -> engine.Store:
    return engine.Store(id=row.store_id, name=row.name, wallet_balance=row.wallet_balance)


def load_catalog(db: Session) -> engine.Catalog:
    skus = [
        engine.Sku(id=r.sku_id, name=r.name, price=r.price, gst_percentage=r.gst_percentage, hsn_code=r.hsn_code)
        for r in db.exec(select(models.SKU))
    ]
    tier_items = [
        engine.PriceTierItem(tier_id=r.tier_id, sku_id=r.sku_id, price=r.price) for r in list_tier_items(db)
    ]
    return engine.Catalog.from_lists(skus, tier_items)


def load_distributor(db: Session, distributor_id: str) -> engine.Distributor:
    row = get_distributor(db, distributor_id)
    if not row:
        raise RecordNotFoundError("Distributor not found")
    return to_engine_distributor(row)


def load_store(db: Session, store_id: str) -> engine.Store:
    row = get_store(db, store_id)
    if not row:
        raise RecordNotFoundError("Store not found")
    return to_engine_store(row)


def load_scheme_pools(db: Session, distributor: Optional[engine.Distributor] = None) -> engine.SchemePools:
    """Fetch the global pool plus the store and distributor pools for ``distributor``."""

    global_schemes = [to_engine_scheme(r) for r in list_schemes(db, global_only=True)]
    if distributor is None:
        return engine.SchemePools(global_schemes=tuple(global_schemes))
    store_schemes = []
    if distributor.store_id:
        store_schemes = [to_engine_scheme(r) for r in list_schemes(db, store_id=distributor.store_id)]
    distributor_schemes = [to_engine_scheme(r) for r in list_schemes(db, distributor_id=distributor.id)]
    return engine.SchemePools(tuple(global_schemes), tuple(store_schemes), tuple(distributor_schemes))


def load_stock(db: Session, location_id: str) -> Dict[str, engine.StockLevel]:
    return engine.stock_map(
        engine.StockLevel(sku_id=r.sku_id, quantity=r.quantity, reserved=r.reserved)
        for r in list_stock(db, location_id)
    )


def to_order_snapshot(db: Session, row: models.Order) -> engine.OrderSnapshot:
    lines = [
        engine.OrderLine(
            sku_id=item.sku_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
            is_freebie=item.is_freebie,
        )
        for item in list_order_items(db, row.order_id)
    ]
    return engine.OrderSnapshot(
        id=row.order_id,
        distributor_id=row.distributor_id,
        date=row.placed_at,
        total_amount=row.total_amount,
        items=tuple(lines),
        status=engine.OrderStatus(row.status),
    )


def load_order(db: Session, order_id: str) -> engine.OrderSnapshot:
    row = get_order(db, order_id)
    if not row:
        raise RecordNotFoundError("Order not found")
    return to_order_snapshot(db, row)


def load_orders(db: Session, *, distributor_id: Optional[str] = None) -> List[engine.OrderSnapshot]:
    return [to_order_snapshot(db, row) for row in list_orders(db, distributor_id=distributor_id)]
