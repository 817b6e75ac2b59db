from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ... import crud
from ...dependencies import get_db
from ...schemas.order import OrderCreate, OrderItemPayload, OrderRead

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def import_order(payload: OrderCreate, db: Session = Depends(get_db)) -> OrderRead:
    """Record an order exactly as the backend persisted it."""
    try:
        crud.create_order(db, payload)
    except crud.DuplicateRecordError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _load_order(db, payload.order_id)


@router.get("", response_model=list[OrderRead])
def list_orders(
    distributor_id: str | None = None,
    status_filter: str | None = None,
    db: Session = Depends(get_db),
) -> list[OrderRead]:
    orders = crud.list_orders(db, distributor_id=distributor_id, status=status_filter)
    return [_load_order(db, order.order_id) for order in orders]


@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: str, db: Session = Depends(get_db)) -> OrderRead:
    order = _load_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


def _load_order(db: Session, order_id: str) -> OrderRead | None:
    order = crud.get_order(db, order_id)
    if not order:
        return None
    items = crud.list_order_items(db, order_id)
    return OrderRead(
        id=order.id,
        order_id=order.order_id,
        distributor_id=order.distributor_id,
        placed_at=order.placed_at,
        total_amount=order.total_amount,
        status=order.status,
        items=[OrderItemPayload.model_validate(item) for item in items],
    )
