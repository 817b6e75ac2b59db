"""Database models for the imported reference data."""

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Store(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: str = Field(index=True, unique=True)
    name: str
    location: Optional[str] = None
    email: Optional[str] = None
    wallet_balance: float = Field(default=0.0)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class SKU(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    sku_id: str = Field(index=True, unique=True)
    name: str
    price: float
    gst_percentage: float = Field(default=0.0)
    hsn_code: str = Field(default="")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class PriceTier(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    tier_id: str = Field(index=True, unique=True)
    name: str
    description: str = Field(default="")


class PriceTierItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    tier_id: str = Field(foreign_key="pricetier.tier_id", index=True)
    sku_id: str = Field(foreign_key="sku.sku_id", index=True)
    price: float


class Distributor(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    distributor_id: str = Field(index=True, unique=True)
    name: str
    state: Optional[str] = Field(default=None, index=True)
    area: Optional[str] = Field(default=None, index=True)
    wallet_balance: float = Field(default=0.0)
    credit_limit: float = Field(default=0.0)
    price_tier_id: Optional[str] = Field(default=None, foreign_key="pricetier.tier_id")
    store_id: Optional[str] = Field(default=None, foreign_key="store.store_id", index=True)
    has_special_schemes: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Scheme(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    scheme_id: str = Field(index=True, unique=True)
    description: str
    buy_sku_id: str = Field(foreign_key="sku.sku_id", index=True)
    buy_quantity: int
    get_sku_id: str = Field(foreign_key="sku.sku_id")
    get_quantity: int
    start_date: date = Field(index=True)
    end_date: date = Field(index=True)
    is_global: bool = Field(default=False, index=True)
    store_id: Optional[str] = Field(default=None, foreign_key="store.store_id", index=True)
    distributor_id: Optional[str] = Field(default=None, foreign_key="distributor.distributor_id", index=True)
    stopped_date: Optional[date] = Field(default=None)
    stopped_by: Optional[str] = Field(default=None)


class StockItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    location_id: str = Field(index=True)
    sku_id: str = Field(foreign_key="sku.sku_id", index=True)
    quantity: int = Field(default=0)
    reserved: int = Field(default=0)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: str = Field(index=True, unique=True)
    distributor_id: str = Field(foreign_key="distributor.distributor_id", index=True)
    placed_at: datetime = Field(index=True)
    total_amount: float = Field(default=0.0)
    status: str = Field(default="Pending", index=True)


class OrderItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: str = Field(foreign_key="order.order_id", index=True)
    sku_id: str = Field(foreign_key="sku.sku_id", index=True)
    quantity: int
    unit_price: float = Field(default=0.0)
    is_freebie: bool = Field(default=False)
    returned_quantity: int = Field(default=0)
