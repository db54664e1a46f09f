# app/router/assets/maintenance_router.py
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.core.auth import require_permission, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.assets import maintenance_crud as crud
from ...schemas.assets.maintenance_schemas import (
    MaintenanceComplete, MaintenanceCreate, MaintenanceOut, MaintenanceRequest)

router = APIRouter(
    prefix="/api/maintenance",
    tags=["maintenance"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/", response_model=List[MaintenanceOut])
def get_maintenance_history(
        params: MaintenanceRequest = Depends(),
        db: Session = Depends(get_db)):
    return crud.get_maintenance_history(db, params)


@router.get("/upcoming", response_model=List[MaintenanceOut])
def get_upcoming_maintenance(
        days: Optional[int] = Query(None, ge=1, le=365),
        db: Session = Depends(get_db)):
    return crud.get_upcoming_maintenance(db, days)


@router.get("/asset/{asset_id}", response_model=List[MaintenanceOut])
def get_maintenance_by_asset(asset_id: UUID, db: Session = Depends(get_db)):
    return crud.get_maintenance_by_asset(db, asset_id)


@router.get("/{maintenance_id}", response_model=MaintenanceOut)
def get_maintenance(maintenance_id: UUID, db: Session = Depends(get_db)):
    return crud.get_maintenance_by_id(db, maintenance_id)


@router.post("/", response_model=None)
def schedule_maintenance(
        data: MaintenanceCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("maintenance", "create"))):
    result = crud.schedule_maintenance(db, data, current_user.actor_id)
    return success_response(
        data=result,
        message="Maintenance scheduled successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.post("/{maintenance_id}/start", response_model=None)
def start_maintenance(
        maintenance_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("maintenance", "update"))):
    result = crud.start_maintenance(db, maintenance_id, current_user.actor_id)
    return success_response(
        data=result,
        message="Maintenance started",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.post("/{maintenance_id}/complete", response_model=None)
def complete_maintenance(
        maintenance_id: UUID,
        data: MaintenanceComplete = MaintenanceComplete(),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("maintenance", "update"))):
    result = crud.complete_maintenance(db, maintenance_id, data, current_user.actor_id)
    return success_response(
        data=result,
        message="Maintenance completed",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.post("/{maintenance_id}/cancel", response_model=None)
def cancel_maintenance(
        maintenance_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("maintenance", "update"))):
    result = crud.cancel_maintenance(db, maintenance_id, current_user.actor_id)
    return success_response(
        data=result,
        message="Maintenance cancelled",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)
