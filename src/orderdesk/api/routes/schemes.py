from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ... import crud, engine
from ...dependencies import get_db
from ...schemas.scheme import SchemeCreate, SchemeRead, SchemeStop
from ..serializers import scheme_read

router = APIRouter(prefix="/schemes", tags=["schemes"])


@router.post("", response_model=SchemeRead, status_code=status.HTTP_201_CREATED)
def create_scheme(payload: SchemeCreate, db: Session = Depends(get_db)) -> SchemeRead:
    try:
        row = crud.create_scheme(db, payload)
    except (crud.DuplicateRecordError, engine.InvalidSchemeError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except crud.RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return scheme_read(row)


@router.get("", response_model=list[SchemeRead])
def list_schemes(
    store_id: str | None = None,
    distributor_id: str | None = None,
    global_only: bool = False,
    db: Session = Depends(get_db),
) -> list[SchemeRead]:
    rows = crud.list_schemes(db, store_id=store_id, distributor_id=distributor_id, global_only=global_only)
    return [scheme_read(row) for row in rows]


@router.post("/{scheme_id}/stop", response_model=SchemeRead)
def stop_scheme(scheme_id: str, payload: SchemeStop, db: Session = Depends(get_db)) -> SchemeRead:
    row = crud.get_scheme(db, scheme_id)
    if not row:
        raise HTTPException(status_code=404, detail="Scheme not found")
    if row.stopped_date is not None:
        raise HTTPException(status_code=400, detail="Scheme already stopped")
    return scheme_read(crud.stop_scheme(db, row, payload))
