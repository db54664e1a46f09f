# app/router/assets/movement_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_permission, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.assets import movement_crud as crud
from ...schemas.assets.movement_schemas import MovementCreate, MovementOut, MovementRequest

router = APIRouter(
    prefix="/api/movements",
    tags=["movements"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/", response_model=List[MovementOut])
def get_movements(
        params: MovementRequest = Depends(),
        db: Session = Depends(get_db)):
    return crud.get_movement_history(db, params)


@router.get("/asset/{asset_id}", response_model=List[MovementOut])
def get_movements_by_asset(asset_id: UUID, db: Session = Depends(get_db)):
    return crud.get_movements_by_asset(db, asset_id)


@router.get("/{movement_id}", response_model=MovementOut)
def get_movement(movement_id: UUID, db: Session = Depends(get_db)):
    return crud.get_movement_by_id(db, movement_id)


@router.post("/entry", response_model=None)
def register_entry(
        data: MovementCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("movements", "create"))):
    result = crud.register_entry(db, data, current_user.actor_id)
    return success_response(
        data=result,
        message="Entry registered successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.post("/exit", response_model=None)
def register_exit(
        data: MovementCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("movements", "create"))):
    result = crud.register_exit(db, data, current_user.actor_id)
    return success_response(
        data=result,
        message="Exit registered successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)
