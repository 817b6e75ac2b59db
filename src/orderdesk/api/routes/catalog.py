from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ... import crud
from ...dependencies import get_db, pagination_params
from ...schemas.catalog import PriceTierCreate, PriceTierRead, SKUCreate, SKURead, TierPricePayload

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _tier_read(db: Session, tier) -> PriceTierRead:
    items = [TierPricePayload(sku_id=i.sku_id, price=i.price) for i in crud.list_tier_items(db, tier.tier_id)]
    return PriceTierRead(id=tier.id, tier_id=tier.tier_id, name=tier.name, description=tier.description, items=items)


@router.post("/skus", response_model=SKURead, status_code=status.HTTP_201_CREATED)
def create_sku(payload: SKUCreate, db: Session = Depends(get_db)) -> SKURead:
    try:
        sku = crud.create_sku(db, payload)
    except crud.DuplicateRecordError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return SKURead.model_validate(sku)


@router.get("/skus", response_model=list[SKURead])
def list_skus(
    pagination: tuple[int, int] = Depends(pagination_params),
    db: Session = Depends(get_db),
) -> list[SKURead]:
    limit, offset = pagination
    return [SKURead.model_validate(sku) for sku in crud.list_skus(db, skip=offset, limit=limit)]


@router.get("/skus/{sku_id}", response_model=SKURead)
def get_sku(sku_id: str, db: Session = Depends(get_db)) -> SKURead:
    sku = crud.get_sku(db, sku_id)
    if not sku:
        raise HTTPException(status_code=404, detail="SKU not found")
    return SKURead.model_validate(sku)


@router.post("/tiers", response_model=PriceTierRead, status_code=status.HTTP_201_CREATED)
def create_price_tier(payload: PriceTierCreate, db: Session = Depends(get_db)) -> PriceTierRead:
    try:
        tier = crud.create_price_tier(db, payload)
    except crud.DuplicateRecordError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _tier_read(db, tier)


@router.get("/tiers", response_model=list[PriceTierRead])
def list_price_tiers(db: Session = Depends(get_db)) -> list[PriceTierRead]:
    return [_tier_read(db, tier) for tier in crud.list_price_tiers(db)]


@router.put("/tiers/{tier_id}/items", response_model=PriceTierRead)
def set_tier_price(tier_id: str, payload: TierPricePayload, db: Session = Depends(get_db)) -> PriceTierRead:
    try:
        crud.set_tier_price(db, tier_id, payload)
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _tier_read(db, crud.get_price_tier(db, tier_id))
