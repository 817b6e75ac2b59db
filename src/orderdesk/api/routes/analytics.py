from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from ... import crud, engine
from ...dependencies import get_db
from ...schemas.analytics import (
    OrderParticipationRead,
    SalesMatrixRead,
    SchemeParticipationRead,
    SkuSalesRead,
)
from ..serializers import applied_scheme_read

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/sales-matrix", response_model=SalesMatrixRead)
def sales_matrix(
    distributor_id: str | None = None,
    scheme_id: str | None = None,
    start: date | None = None,
    end: date | None = None,
    db: Session = Depends(get_db),
) -> SalesMatrixRead:
    if start and end and end < start:
        raise HTTPException(status_code=400, detail="End date is before start date")
    orders = crud.load_orders(db, distributor_id=distributor_id)
    if scheme_id:
        scheme_row = crud.get_scheme(db, scheme_id)
        if not scheme_row:
            raise HTTPException(status_code=404, detail="Scheme not found")
        orders = engine.orders_meeting_scheme(orders, crud.to_engine_scheme(scheme_row))
    matrix = engine.sales_matrix(orders, start, end)
    units = engine.free_unit_totals(orders, start, end)
    return SalesMatrixRead(
        distributors={
            dist_id: {
                sku_id: SkuSalesRead(paid=cell.paid, free=cell.free, sales_value=cell.sales_value)
                for sku_id, cell in row.items()
            }
            for dist_id, row in matrix.items()
        },
        total_paid_units=units["paid"],
        total_free_units=units["free"],
    )


@router.get("/scheme-participation/{distributor_id}", response_model=SchemeParticipationRead)
def scheme_participation(distributor_id: str, db: Session = Depends(get_db)) -> SchemeParticipationRead:
    try:
        distributor = crud.load_distributor(db, distributor_id)
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    pools = crud.load_scheme_pools(db, distributor)
    delivered = engine.delivered_orders(crud.load_orders(db, distributor_id=distributor_id))
    entries = []
    for order in delivered:
        applied = engine.scheme_participation(order, distributor, pools)
        if applied:
            entries.append(
                OrderParticipationRead(
                    order_id=order.id, applied_schemes=[applied_scheme_read(a) for a in applied]
                )
            )
    return SchemeParticipationRead(
        distributor_id=distributor_id,
        delivered_orders=len(delivered),
        participating_orders=len(entries),
        orders=entries,
    )
