# app/router/assets/incident_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_permission, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.assets import incident_crud as crud
from ...schemas.assets.incident_schemas import IncidentCreate, IncidentOut, IncidentRequest, IncidentResolve

router = APIRouter(
    prefix="/api/incidents",
    tags=["incidents"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/", response_model=List[IncidentOut])
def get_incidents(
        params: IncidentRequest = Depends(),
        db: Session = Depends(get_db)):
    return crud.get_incident_history(db, params)


@router.get("/active", response_model=List[IncidentOut])
def get_active_incidents(db: Session = Depends(get_db)):
    return crud.get_active_incidents(db)


@router.get("/asset/{asset_id}", response_model=List[IncidentOut])
def get_incidents_by_asset(asset_id: UUID, db: Session = Depends(get_db)):
    return crud.get_incidents_by_asset(db, asset_id)


@router.get("/{incident_id}", response_model=IncidentOut)
def get_incident(incident_id: UUID, db: Session = Depends(get_db)):
    return crud.get_incident_by_id(db, incident_id)


@router.post("/", response_model=None)
def report_incident(
        data: IncidentCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("incidents", "create"))):
    result = crud.report_incident(db, data, current_user.actor_id)
    return success_response(
        data=result,
        message="Incident reported successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.post("/{incident_id}/investigate", response_model=None)
def investigate_incident(
        incident_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("incidents", "update"))):
    result = crud.investigate_incident(db, incident_id, current_user.actor_id)
    return success_response(
        data=result,
        message="Incident under investigation",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.post("/{incident_id}/resolve", response_model=None)
def resolve_incident(
        incident_id: UUID,
        data: IncidentResolve,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("incidents", "update"))):
    result = crud.resolve_incident(db, incident_id, data, current_user.actor_id)
    return success_response(
        data=result,
        message="Incident resolved",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.post("/{incident_id}/close", response_model=None)
def close_incident(
        incident_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("incidents", "update"))):
    result = crud.close_incident(db, incident_id, current_user.actor_id)
    return success_response(
        data=result,
        message="Incident closed",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)
