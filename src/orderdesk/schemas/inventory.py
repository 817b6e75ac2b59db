from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StockLevelPayload(BaseModel):
    sku_id: str
    quantity: int = Field(..., ge=0)
    reserved: int = Field(default=0, ge=0)


class StockLevelRead(StockLevelPayload):
    model_config = ConfigDict(from_attributes=True)

    location_id: str
    available: int
    updated_at: datetime
