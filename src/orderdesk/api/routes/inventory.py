from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from ... import crud
from ...engine import PLANT_LOCATION
from ...dependencies import get_db
from ...schemas.inventory import StockLevelPayload, StockLevelRead
from ..serializers import stock_read

router = APIRouter(prefix="/stock", tags=["inventory"])


@router.put("/{location_id}", response_model=StockLevelRead)
def set_stock_level(location_id: str, payload: StockLevelPayload, db: Session = Depends(get_db)) -> StockLevelRead:
    if location_id != PLANT_LOCATION and not crud.get_store(db, location_id):
        raise HTTPException(status_code=404, detail="Location not found")
    try:
        item = crud.upsert_stock(db, location_id, payload)
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return stock_read([item])[0]


@router.get("/{location_id}", response_model=list[StockLevelRead])
def list_stock(location_id: str, db: Session = Depends(get_db)) -> list[StockLevelRead]:
    return stock_read(crud.list_stock(db, location_id))
