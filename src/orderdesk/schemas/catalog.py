from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SKUBase(BaseModel):
    sku_id: str = Field(..., min_length=1, max_length=64)
    name: str
    price: float = Field(..., ge=0)
    gst_percentage: float = Field(default=0.0, ge=0)
    hsn_code: str = ""


class SKUCreate(SKUBase):
    pass


class SKURead(SKUBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime


class TierPricePayload(BaseModel):
    sku_id: str
    price: float = Field(..., ge=0)


class PriceTierBase(BaseModel):
    tier_id: str = Field(..., min_length=1, max_length=64)
    name: str
    description: str = ""


class PriceTierCreate(PriceTierBase):
    items: List[TierPricePayload] = Field(default_factory=list)


class PriceTierRead(PriceTierBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    items: List[TierPricePayload] = Field(default_factory=list)


class PriceTierUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
