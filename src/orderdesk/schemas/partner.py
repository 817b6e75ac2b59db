from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class StoreBase(BaseModel):
    store_id: str = Field(..., min_length=1, max_length=64)
    name: str
    location: Optional[str] = None
    email: Optional[EmailStr] = None
    wallet_balance: float = 0.0


class StoreCreate(StoreBase):
    pass


class StoreRead(StoreBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime


class DistributorBase(BaseModel):
    distributor_id: str = Field(..., min_length=1, max_length=64)
    name: str
    state: Optional[str] = None
    area: Optional[str] = None
    wallet_balance: float = 0.0
    credit_limit: float = Field(default=0.0, ge=0)
    price_tier_id: Optional[str] = None
    store_id: Optional[str] = None
    has_special_schemes: bool = False


class DistributorCreate(DistributorBase):
    pass


class DistributorUpdate(BaseModel):
    name: Optional[str] = None
    wallet_balance: Optional[float] = None
    credit_limit: Optional[float] = Field(default=None, ge=0)
    price_tier_id: Optional[str] = None
    store_id: Optional[str] = None
    has_special_schemes: Optional[bool] = None


class DistributorRead(DistributorBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
