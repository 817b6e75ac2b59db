from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .catalog import PriceTierCreate, SKUCreate
from .inventory import StockLevelPayload
from .order import OrderCreate
from .partner import DistributorCreate, StoreCreate
from .preview import DraftItemPayload
from .scheme import SchemeCreate


class SnapshotFile(BaseModel):
    """Reference data exported from the backend, keyed the way the tables are."""

    skus: List[SKUCreate] = Field(default_factory=list)
    price_tiers: List[PriceTierCreate] = Field(default_factory=list)
    stores: List[StoreCreate] = Field(default_factory=list)
    distributors: List[DistributorCreate] = Field(default_factory=list)
    schemes: List[SchemeCreate] = Field(default_factory=list)
    stock: Dict[str, List[StockLevelPayload]] = Field(default_factory=dict, description="location id -> levels")
    orders: List[OrderCreate] = Field(default_factory=list)


class PreviewFile(SnapshotFile):
    """A snapshot plus the draft to price.

    Exactly one of ``distributor_id`` (new order), ``store_id`` (plant to
    store transfer) or ``order_id`` (edit of a pending order) selects the flow.
    """

    distributor_id: Optional[str] = None
    store_id: Optional[str] = None
    order_id: Optional[str] = None
    items: List[DraftItemPayload] = Field(default_factory=list)
    as_of: Optional[date] = None
