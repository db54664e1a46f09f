# app/router/assets/assignment_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_inventory_access, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.assets import assignment_crud as crud
from ...schemas.assets.assignment_schemas import (
    AssignmentCreate, AssignmentOut, AssignmentRequest, AssignmentReturn, AssignmentTransfer)

router = APIRouter(
    prefix="/api/assignments",
    tags=["assignments"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/", response_model=List[AssignmentOut])
def get_assignments(
        params: AssignmentRequest = Depends(),
        db: Session = Depends(get_db)):
    return crud.get_assignment_history(db, params)


@router.get("/active", response_model=List[AssignmentOut])
def get_active_assignments(db: Session = Depends(get_db)):
    return crud.get_active_assignments(db)


@router.get("/asset/{asset_id}", response_model=List[AssignmentOut])
def get_assignments_by_asset(asset_id: UUID, db: Session = Depends(get_db)):
    return crud.get_assignments_by_asset(db, asset_id)


@router.get("/user/{user_id}", response_model=List[AssignmentOut])
def get_assignments_by_user(user_id: UUID, db: Session = Depends(get_db)):
    return crud.get_assignments_by_user(db, user_id)


@router.get("/{assignment_id}", response_model=AssignmentOut)
def get_assignment(assignment_id: UUID, db: Session = Depends(get_db)):
    return crud.get_assignment_by_id(db, assignment_id)


@router.post("/", response_model=None)
def assign_asset(
        data: AssignmentCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_inventory_access)):
    result = crud.assign_asset(db, data, current_user.actor_id)
    return success_response(
        data=result,
        message="Asset assigned successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.post("/{asset_id}/return", response_model=None)
def return_asset(
        asset_id: UUID,
        data: AssignmentReturn = AssignmentReturn(),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_inventory_access)):
    result = crud.return_asset(db, asset_id, data, current_user.actor_id)
    return success_response(
        data=result,
        message="Asset returned successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.post("/{asset_id}/transfer", response_model=None)
def transfer_asset(
        asset_id: UUID,
        data: AssignmentTransfer,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_inventory_access)):
    result = crud.transfer_asset(db, asset_id, data, current_user.actor_id)
    return success_response(
        data=result,
        message="Asset transferred successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)
