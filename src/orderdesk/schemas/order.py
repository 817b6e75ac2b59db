from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class OrderItemPayload(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sku_id: str
    quantity: int = Field(..., gt=0)
    unit_price: float = Field(default=0.0, ge=0)
    is_freebie: bool = False
    returned_quantity: int = Field(default=0, ge=0)


class OrderBase(BaseModel):
    order_id: str = Field(..., min_length=1, max_length=64)
    distributor_id: str
    placed_at: datetime
    total_amount: float
    status: str = Field(default="Pending", pattern="^(Pending|Delivered)$")


class OrderCreate(OrderBase):
    items: List[OrderItemPayload]


class OrderRead(OrderBase):
    id: int
    items: List[OrderItemPayload] = Field(default_factory=list)
