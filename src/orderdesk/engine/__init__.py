"""Pure order pricing and scheme resolution engine.

Nothing in this package performs I/O or reads the clock; callers pass
snapshots and an explicit ``as_of`` date.
"""

from .analytics import (
    SkuSales,
    delivered_orders,
    free_unit_totals,
    orders_meeting_scheme,
    participation_count,
    sales_matrix,
    scheme_participation,
)
from .edit import DeltaDirection, EditDelta, committed_quantities, draft_from_order, order_delta
from .feasibility import check_distributor_funds, check_edit_funds, check_stock, check_store_funds
from .freebies import Allocation, allocate_freebies, purchased_quantities
from .money import round_money
from .pricing import ResolvedPrice, build_tier_price_map, resolve_unit_price
from .preview import (
    Catalog,
    EditPreview,
    preview_distributor_order,
    preview_order_edit,
    preview_store_transfer,
    stock_map,
)
from .schemes import SchemePools, eligible_schemes
from .totals import calculate_totals
from .types import (
    PLANT_LOCATION,
    AppliedScheme,
    DisplayLine,
    Distributor,
    DraftItem,
    FundsCheck,
    InvalidSchemeError,
    OrderLine,
    OrderPreview,
    OrderSnapshot,
    OrderStatus,
    OrderTotals,
    PriceTier,
    PriceTierItem,
    Scheme,
    SchemeScope,
    Sku,
    StockCheck,
    StockLevel,
    Store,
)

__all__ = [
    "PLANT_LOCATION",
    "Allocation",
    "AppliedScheme",
    "Catalog",
    "DeltaDirection",
    "DisplayLine",
    "Distributor",
    "DraftItem",
    "EditDelta",
    "EditPreview",
    "FundsCheck",
    "InvalidSchemeError",
    "OrderLine",
    "OrderPreview",
    "OrderSnapshot",
    "OrderStatus",
    "OrderTotals",
    "PriceTier",
    "PriceTierItem",
    "ResolvedPrice",
    "Scheme",
    "SchemePools",
    "SchemeScope",
    "Sku",
    "SkuSales",
    "StockCheck",
    "StockLevel",
    "Store",
    "allocate_freebies",
    "build_tier_price_map",
    "calculate_totals",
    "check_distributor_funds",
    "check_edit_funds",
    "check_stock",
    "check_store_funds",
    "committed_quantities",
    "delivered_orders",
    "draft_from_order",
    "eligible_schemes",
    "free_unit_totals",
    "order_delta",
    "orders_meeting_scheme",
    "participation_count",
    "preview_distributor_order",
    "preview_order_edit",
    "preview_store_transfer",
    "purchased_quantities",
    "resolve_unit_price",
    "round_money",
    "sales_matrix",
    "scheme_participation",
    "stock_map",
]
