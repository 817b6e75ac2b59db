from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ... import crud
from ...dependencies import get_db, pagination_params
from ...schemas.partner import (
    DistributorCreate,
    DistributorRead,
    DistributorUpdate,
    StoreCreate,
    StoreRead,
)

router = APIRouter(tags=["partners"])


@router.post("/stores", response_model=StoreRead, status_code=status.HTTP_201_CREATED)
def create_store(payload: StoreCreate, db: Session = Depends(get_db)) -> StoreRead:
    try:
        store = crud.create_store(db, payload)
    except crud.DuplicateRecordError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return StoreRead.model_validate(store)


@router.get("/stores", response_model=list[StoreRead])
def list_stores(db: Session = Depends(get_db)) -> list[StoreRead]:
    return [StoreRead.model_validate(store) for store in crud.list_stores(db)]


@router.post("/distributors", response_model=DistributorRead, status_code=status.HTTP_201_CREATED)
def create_distributor(payload: DistributorCreate, db: Session = Depends(get_db)) -> DistributorRead:
    try:
        distributor = crud.create_distributor(db, payload)
    except crud.DuplicateRecordError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return DistributorRead.model_validate(distributor)


@router.get("/distributors", response_model=list[DistributorRead])
def list_distributors(
    pagination: tuple[int, int] = Depends(pagination_params),
    db: Session = Depends(get_db),
) -> list[DistributorRead]:
    limit, offset = pagination
    return [DistributorRead.model_validate(d) for d in crud.list_distributors(db, skip=offset, limit=limit)]


@router.get("/distributors/{distributor_id}", response_model=DistributorRead)
def get_distributor(distributor_id: str, db: Session = Depends(get_db)) -> DistributorRead:
    distributor = crud.get_distributor(db, distributor_id)
    if not distributor:
        raise HTTPException(status_code=404, detail="Distributor not found")
    return DistributorRead.model_validate(distributor)


@router.patch("/distributors/{distributor_id}", response_model=DistributorRead)
def update_distributor(
    distributor_id: str, payload: DistributorUpdate, db: Session = Depends(get_db)
) -> DistributorRead:
    distributor = crud.get_distributor(db, distributor_id)
    if not distributor:
        raise HTTPException(status_code=404, detail="Distributor not found")
    try:
        distributor = crud.update_distributor(db, distributor, payload)
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return DistributorRead.model_validate(distributor)
