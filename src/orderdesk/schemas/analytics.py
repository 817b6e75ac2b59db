from typing import Dict, List

from pydantic import BaseModel

from .preview import AppliedSchemeRead


class SkuSalesRead(BaseModel):
    paid: int
    free: int
    sales_value: float


class SalesMatrixRead(BaseModel):
    distributors: Dict[str, Dict[str, SkuSalesRead]]
    total_paid_units: int
    total_free_units: int


class OrderParticipationRead(BaseModel):
    order_id: str
    applied_schemes: List[AppliedSchemeRead]


class SchemeParticipationRead(BaseModel):
    distributor_id: str
    delivered_orders: int
    participating_orders: int
    orders: List[OrderParticipationRead]
