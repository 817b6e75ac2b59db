from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class DraftItemPayload(BaseModel):
    sku_id: str
    quantity: int


class OrderPreviewRequest(BaseModel):
    distributor_id: str
    items: List[DraftItemPayload] = Field(default_factory=list)
    as_of: Optional[date] = Field(default=None, description="Scheme evaluation date, defaults to today")


class TransferPreviewRequest(BaseModel):
    store_id: str
    items: List[DraftItemPayload] = Field(default_factory=list)
    as_of: Optional[date] = None


class EditPreviewRequest(BaseModel):
    items: List[DraftItemPayload] = Field(default_factory=list)


class DisplayLineRead(BaseModel):
    sku_id: str
    sku_name: str
    quantity: int
    unit_price: float
    line_total: float
    is_freebie: bool
    has_tier_price: bool
    scheme_source: Optional[str] = None


class AppliedSchemeRead(BaseModel):
    scheme_id: str
    description: str
    times_applied: int
    get_sku_id: str
    free_quantity: int


class TotalsRead(BaseModel):
    subtotal: float
    gst_amount: float
    grand_total: float


class StockCheckRead(BaseModel):
    has_issues: bool
    issues: List[str] = Field(default_factory=list)


class FundsCheckRead(BaseModel):
    passes: bool
    required: float
    available: float
    needs_credit_confirmation: bool = False
    credit_draw: float = 0.0
    message: Optional[str] = None


class SubmissionItemRead(BaseModel):
    sku_id: str
    quantity: int


class OrderPreviewRead(BaseModel):
    lines: List[DisplayLineRead]
    applied_schemes: List[AppliedSchemeRead]
    totals: TotalsRead
    stock_check: StockCheckRead
    funds_check: FundsCheckRead
    can_submit: bool
    submission: List[SubmissionItemRead]


class EditPreviewRead(OrderPreviewRead):
    original_total: float
    delta: float
    delta_direction: str
