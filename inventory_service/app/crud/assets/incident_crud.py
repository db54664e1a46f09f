# app/crud/assets/incident_crud.py
import logging
from typing import List
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session, joinedload

from shared.core.database import atomic
from shared.core.exceptions import InvalidStateError, NotFoundError
from ...enum.inventory_enum import (
    AssetStatus, AssignmentStatus, DECOMMISSIONING_INCIDENTS, IncidentStatus, IncidentType)
from ...models.assets.assets import Asset
from ...models.assets.incidents import Incident
from ...schemas.assets.incident_schemas import IncidentCreate, IncidentOut, IncidentRequest, IncidentResolve
from .assets_crud import get_asset_or_404, lock_asset
from .assignment_crud import get_active_assignment

logger = logging.getLogger(__name__)

ACTIVE_INCIDENT_STATUSES = (
    IncidentStatus.REPORTED.value,
    IncidentStatus.INVESTIGATING.value,
)


def _incident_query(db: Session):
    return db.query(Incident).options(
        joinedload(Incident.asset).joinedload(Asset.category),
        joinedload(Incident.reported_by),
    )


def _lock_incident(db: Session, incident_id: UUID) -> Incident:
    incident = (
        db.query(Incident)
        .filter(Incident.id == incident_id)
        .with_for_update()
        .first()
    )
    if not incident:
        raise NotFoundError("Incident", incident_id)
    return incident


def _advance(incident: Incident, required: IncidentStatus, target: IncidentStatus):
    if incident.status != required.value:
        logger.warning("Incident %s cannot move to %s from %s",
                       incident.id, target.value, incident.status)
        raise InvalidStateError(
            f"Incident must be {required.value} to move to {target.value}",
            current=incident.status,
            required=required.value)
    incident.status = target.value


def _decommission(db: Session, asset: Asset, now: datetime):
    """Take a lost or stolen asset out of inventory and close its custody."""
    assignment = get_active_assignment(db, asset.id)
    if assignment:
        assignment.status = AssignmentStatus.RETURNED.value
        assignment.returned_at = now
        assignment.notes = "Closed by incident"

    asset.status = AssetStatus.DECOMMISSIONED.value
    asset.assigned_to_id = None
    asset.assigned_at = None
    asset.current_location = None


def report_incident(db: Session, data: IncidentCreate, actor_id: UUID) -> IncidentOut:
    with atomic(db):
        asset = lock_asset(db, data.asset_id)
        if asset.status == AssetStatus.DECOMMISSIONED.value:
            raise InvalidStateError("Cannot report incidents on a decommissioned asset",
                                    current=asset.status)

        now = datetime.now(timezone.utc)
        values = data.model_dump()
        values["type"] = data.type.value
        incident = Incident(
            **values,
            status=IncidentStatus.REPORTED.value,
            reported_by_id=actor_id,
            reported_date=now,
        )
        db.add(incident)

        if data.type in DECOMMISSIONING_INCIDENTS:
            _decommission(db, asset, now)

    if data.type in DECOMMISSIONING_INCIDENTS:
        logger.info("Asset %s decommissioned after %s incident %s",
                    data.asset_id, data.type.value, incident.id)
    logger.info("Incident %s reported on asset %s by %s",
                incident.id, data.asset_id, actor_id)
    return get_incident_by_id(db, incident.id)


def investigate_incident(db: Session, incident_id: UUID, actor_id: UUID) -> IncidentOut:
    with atomic(db):
        incident = _lock_incident(db, incident_id)
        _advance(incident, IncidentStatus.REPORTED, IncidentStatus.INVESTIGATING)

    logger.info("Incident %s under investigation by %s", incident_id, actor_id)
    return get_incident_by_id(db, incident_id)


def resolve_incident(db: Session, incident_id: UUID, data: IncidentResolve, actor_id: UUID) -> IncidentOut:
    with atomic(db):
        incident = _lock_incident(db, incident_id)
        _advance(incident, IncidentStatus.INVESTIGATING, IncidentStatus.RESOLVED)

        incident.resolution = data.resolution
        incident.resolved_date = data.resolved_date or datetime.now(timezone.utc)
        if data.cost is not None:
            incident.cost = data.cost

        if incident.type == IncidentType.DANO.value:
            asset = lock_asset(db, incident.asset_id)
            if asset.status == AssetStatus.IN_REPAIR.value:
                asset.status = (AssetStatus.IN_USE.value if asset.assigned_to_id
                                else AssetStatus.AVAILABLE.value)

    logger.info("Incident %s resolved by %s", incident_id, actor_id)
    return get_incident_by_id(db, incident_id)


def close_incident(db: Session, incident_id: UUID, actor_id: UUID) -> IncidentOut:
    with atomic(db):
        incident = _lock_incident(db, incident_id)
        _advance(incident, IncidentStatus.RESOLVED, IncidentStatus.CLOSED)

    logger.info("Incident %s closed by %s", incident_id, actor_id)
    return get_incident_by_id(db, incident_id)


def get_incident_history(db: Session, params: IncidentRequest) -> List[IncidentOut]:
    query = _incident_query(db)

    if params.asset_id:
        query = query.filter(Incident.asset_id == params.asset_id)
    if params.type:
        query = query.filter(Incident.type == params.type.value)
    if params.status:
        query = query.filter(Incident.status == params.status.value)
    if params.start_date:
        query = query.filter(Incident.reported_date >= params.start_date)
    if params.end_date:
        query = query.filter(Incident.reported_date <= params.end_date)

    incidents = query.order_by(Incident.reported_date.desc()).all()
    return [IncidentOut.model_validate(i) for i in incidents]


def get_active_incidents(db: Session) -> List[IncidentOut]:
    incidents = (
        _incident_query(db)
        .filter(Incident.status.in_(ACTIVE_INCIDENT_STATUSES))
        .order_by(Incident.reported_date.desc())
        .all()
    )
    return [IncidentOut.model_validate(i) for i in incidents]


def get_incidents_by_asset(db: Session, asset_id: UUID) -> List[IncidentOut]:
    get_asset_or_404(db, asset_id)
    return get_incident_history(db, IncidentRequest(asset_id=asset_id))


def get_incident_by_id(db: Session, incident_id: UUID) -> IncidentOut:
    incident = _incident_query(db).filter(Incident.id == incident_id).first()
    if not incident:
        raise NotFoundError("Incident", incident_id)
    return IncidentOut.model_validate(incident)
