from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SchemeBase(BaseModel):
    scheme_id: str = Field(..., min_length=1, max_length=64)
    description: str
    buy_sku_id: str
    buy_quantity: int = Field(..., gt=0)
    get_sku_id: str
    get_quantity: int = Field(..., gt=0)
    start_date: date
    end_date: date
    is_global: bool = False
    store_id: Optional[str] = None
    distributor_id: Optional[str] = None


class SchemeCreate(SchemeBase):
    pass


class SchemeStop(BaseModel):
    stopped_by: str = Field(..., min_length=1)
    stopped_date: Optional[date] = None


class SchemeRead(SchemeBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    stopped_date: Optional[date] = None
    stopped_by: Optional[str] = None
    scope: str
