from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from ... import crud, engine
from ...dependencies import get_db
from ...schemas.preview import (
    DraftItemPayload,
    EditPreviewRead,
    EditPreviewRequest,
    OrderPreviewRead,
    OrderPreviewRequest,
    TransferPreviewRequest,
)
from ..serializers import edit_preview_read, order_preview_read

router = APIRouter(prefix="/preview", tags=["preview"])


def _draft(items: list[DraftItemPayload]) -> list[engine.DraftItem]:
    return [engine.DraftItem(sku_id=item.sku_id, quantity=item.quantity) for item in items]


@router.post("/orders", response_model=OrderPreviewRead)
def preview_order(payload: OrderPreviewRequest, db: Session = Depends(get_db)) -> OrderPreviewRead:
    try:
        distributor = crud.load_distributor(db, payload.distributor_id)
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    preview = engine.preview_distributor_order(
        _draft(payload.items),
        distributor,
        crud.load_catalog(db),
        crud.load_scheme_pools(db, distributor),
        crud.load_stock(db, distributor.stock_location),
        as_of=payload.as_of or date.today(),
    )
    return order_preview_read(preview)


@router.post("/transfers", response_model=OrderPreviewRead)
def preview_transfer(payload: TransferPreviewRequest, db: Session = Depends(get_db)) -> OrderPreviewRead:
    try:
        store = crud.load_store(db, payload.store_id)
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    preview = engine.preview_store_transfer(
        _draft(payload.items),
        store,
        crud.load_catalog(db),
        crud.load_scheme_pools(db),
        crud.load_stock(db, engine.PLANT_LOCATION),
        as_of=payload.as_of or date.today(),
    )
    return order_preview_read(preview)


@router.post("/orders/{order_id}/edit", response_model=EditPreviewRead)
def preview_order_edit(order_id: str, payload: EditPreviewRequest, db: Session = Depends(get_db)) -> EditPreviewRead:
    try:
        order = crud.load_order(db, order_id)
        distributor = crud.load_distributor(db, order.distributor_id)
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    if order.status is not engine.OrderStatus.PENDING:
        raise HTTPException(status_code=400, detail="Cannot edit a delivered order.")

    preview = engine.preview_order_edit(
        _draft(payload.items),
        order,
        distributor,
        crud.load_catalog(db),
        crud.load_scheme_pools(db, distributor),
        crud.load_stock(db, distributor.stock_location),
    )
    return edit_preview_read(preview)
