"""Immutable snapshots consumed by the engine and the results it produces.

Every reference object is a frozen dataclass built once per screen load; the
engine never mutates them. Money is carried as :class:`~decimal.Decimal`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from .money import ZERO, d

PLANT_LOCATION = "plant"


class InvalidSchemeError(ValueError):
    """Raised when a scheme definition breaks its structural invariants."""


class SchemeScope(str, enum.Enum):
    GLOBAL = "Global"
    STORE = "Store"
    DISTRIBUTOR = "Distributor"


class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    DELIVERED = "Delivered"


@dataclass(frozen=True)
class Sku:
    id: str
    name: str
    price: Decimal
    gst_percentage: Decimal = ZERO
    hsn_code: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", d(self.price))
        object.__setattr__(self, "gst_percentage", d(self.gst_percentage))


@dataclass(frozen=True)
class PriceTier:
    id: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class PriceTierItem:
    tier_id: str
    sku_id: str
    price: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", d(self.price))


@dataclass(frozen=True)
class Scheme:
    """A "buy X, get Y free" rule with a scope and an inclusive date window."""

    id: str
    description: str
    buy_sku_id: str
    buy_quantity: int
    get_sku_id: str
    get_quantity: int
    start_date: date
    end_date: date
    is_global: bool = False
    store_id: Optional[str] = None
    distributor_id: Optional[str] = None
    stopped_date: Optional[date] = None
    stopped_by: Optional[str] = None

    def __post_init__(self) -> None:
        flags = [self.is_global, self.store_id is not None, self.distributor_id is not None]
        if sum(flags) != 1:
            raise InvalidSchemeError(
                f"Scheme {self.id} must be exactly one of global, store-scoped or distributor-scoped"
            )
        if self.buy_quantity <= 0 or self.get_quantity <= 0:
            raise InvalidSchemeError(f"Scheme {self.id} must have positive buy and get quantities")

    @property
    def scope(self) -> SchemeScope:
        if self.is_global:
            return SchemeScope.GLOBAL
        if self.store_id is not None:
            return SchemeScope.STORE
        return SchemeScope.DISTRIBUTOR

    def is_active(self, as_of: date) -> bool:
        return self.start_date <= as_of <= self.end_date and self.stopped_date is None


@dataclass(frozen=True)
class Distributor:
    id: str
    name: str
    wallet_balance: Decimal = ZERO
    credit_limit: Decimal = ZERO
    price_tier_id: Optional[str] = None
    store_id: Optional[str] = None
    has_special_schemes: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "wallet_balance", d(self.wallet_balance))
        object.__setattr__(self, "credit_limit", d(self.credit_limit))

    @property
    def available_funds(self) -> Decimal:
        return self.wallet_balance + self.credit_limit

    @property
    def stock_location(self) -> str:
        """Where this distributor's orders are fulfilled from."""
        return self.store_id or PLANT_LOCATION


@dataclass(frozen=True)
class Store:
    id: str
    name: str
    wallet_balance: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "wallet_balance", d(self.wallet_balance))


@dataclass(frozen=True)
class StockLevel:
    sku_id: str
    quantity: int
    reserved: int = 0

    @property
    def available(self) -> int:
        return self.quantity - self.reserved


@dataclass(frozen=True)
class DraftItem:
    sku_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLine:
    sku_id: str
    quantity: int
    unit_price: Decimal = ZERO
    is_freebie: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit_price", d(self.unit_price))


@dataclass(frozen=True)
class OrderSnapshot:
    """A persisted order as returned by the authoritative backend."""

    id: str
    distributor_id: str
    date: datetime
    total_amount: Decimal
    items: Tuple[OrderLine, ...] = ()
    status: OrderStatus = OrderStatus.PENDING

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_amount", d(self.total_amount))
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def order_date(self) -> date:
        return self.date.date() if isinstance(self.date, datetime) else self.date

    @property
    def paid_lines(self) -> List[OrderLine]:
        return [line for line in self.items if not line.is_freebie]


# Results


@dataclass(frozen=True)
class DisplayLine:
    sku_id: str
    sku_name: str
    quantity: int
    unit_price: Decimal
    is_freebie: bool = False
    has_tier_price: bool = False
    scheme_source: Optional[str] = None

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class AppliedScheme:
    scheme: Scheme
    times_applied: int = 0

    @property
    def free_quantity(self) -> int:
        return self.times_applied * self.scheme.get_quantity


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    gst_amount: Decimal
    grand_total: Decimal


@dataclass(frozen=True)
class StockCheck:
    issues: Tuple[str, ...] = ()

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)


@dataclass(frozen=True)
class FundsCheck:
    passes: bool
    required: Decimal
    available: Decimal
    needs_credit_confirmation: bool = False
    credit_draw: Decimal = ZERO
    message: Optional[str] = None


@dataclass(frozen=True)
class SubmissionItem:
    sku_id: str
    quantity: int


@dataclass
class OrderPreview:
    """Everything the caller needs to render a draft and gate submission."""

    lines: List[DisplayLine]
    applied_schemes: List[AppliedScheme]
    totals: OrderTotals
    stock_check: StockCheck
    funds_check: FundsCheck
    can_submit: bool
    submission: List[SubmissionItem] = field(default_factory=list)

    @property
    def paid_lines(self) -> List[DisplayLine]:
        return [line for line in self.lines if not line.is_freebie]

    @property
    def freebie_lines(self) -> List[DisplayLine]:
        return [line for line in self.lines if line.is_freebie]

    def submission_payload(self) -> List[Dict[str, object]]:
        return [{"skuId": item.sku_id, "quantity": item.quantity} for item in self.submission]
