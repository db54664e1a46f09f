# app/crud/assets/maintenance_crud.py
import logging
from typing import List, Optional
from uuid import UUID
from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session, joinedload

from shared.core.config import settings
from shared.core.database import atomic
from shared.core.exceptions import InvalidStateError, NotFoundError
from ...enum.inventory_enum import AssetStatus, MaintenanceStatus
from ...models.assets.assets import Asset
from ...models.assets.maintenance import Maintenance
from ...schemas.assets.maintenance_schemas import (
    MaintenanceComplete, MaintenanceCreate, MaintenanceOut, MaintenanceRequest)
from .assets_crud import get_asset_or_404, lock_asset

logger = logging.getLogger(__name__)


def _maintenance_query(db: Session):
    return db.query(Maintenance).options(
        joinedload(Maintenance.asset).joinedload(Asset.category),
        joinedload(Maintenance.user),
    )


def _lock_maintenance(db: Session, maintenance_id: UUID) -> Maintenance:
    maintenance = (
        db.query(Maintenance)
        .filter(Maintenance.id == maintenance_id)
        .with_for_update()
        .first()
    )
    if not maintenance:
        raise NotFoundError("Maintenance", maintenance_id)
    return maintenance


def _require_status(maintenance: Maintenance, required: MaintenanceStatus, action: str):
    if maintenance.status != required.value:
        logger.warning("Maintenance %s cannot %s from %s",
                       maintenance.id, action, maintenance.status)
        raise InvalidStateError(
            f"Only {required.value.lower().replace('_', ' ')} maintenance can {action}",
            current=maintenance.status,
            required=required.value)


def _restore_asset(asset: Asset):
    """Put an asset back in service after repair, keeping its holder."""
    if asset.status == AssetStatus.IN_REPAIR.value:
        asset.status = (AssetStatus.IN_USE.value if asset.assigned_to_id
                        else AssetStatus.AVAILABLE.value)


def schedule_maintenance(db: Session, data: MaintenanceCreate, actor_id: UUID) -> MaintenanceOut:
    with atomic(db):
        asset = lock_asset(db, data.asset_id)
        if asset.status == AssetStatus.DECOMMISSIONED.value:
            raise InvalidStateError("Cannot schedule maintenance for a decommissioned asset",
                                    current=asset.status)

        values = data.model_dump()
        values["type"] = data.type.value
        maintenance = Maintenance(
            **values,
            status=MaintenanceStatus.SCHEDULED.value,
            user_id=actor_id,
        )
        db.add(maintenance)

    logger.info("Maintenance %s scheduled on asset %s by %s",
                maintenance.id, data.asset_id, actor_id)
    return get_maintenance_by_id(db, maintenance.id)


def start_maintenance(db: Session, maintenance_id: UUID, actor_id: UUID) -> MaintenanceOut:
    with atomic(db):
        maintenance = _lock_maintenance(db, maintenance_id)
        _require_status(maintenance, MaintenanceStatus.SCHEDULED, "start")

        asset = lock_asset(db, maintenance.asset_id)
        if asset.status == AssetStatus.DECOMMISSIONED.value:
            raise InvalidStateError("Asset has been decommissioned",
                                    current=asset.status)

        maintenance.status = MaintenanceStatus.IN_PROGRESS.value
        asset.status = AssetStatus.IN_REPAIR.value

    logger.info("Maintenance %s started by %s, asset %s in repair",
                maintenance_id, actor_id, maintenance.asset_id)
    return get_maintenance_by_id(db, maintenance_id)


def complete_maintenance(db: Session, maintenance_id: UUID, data: MaintenanceComplete, actor_id: UUID) -> MaintenanceOut:
    with atomic(db):
        maintenance = _lock_maintenance(db, maintenance_id)
        _require_status(maintenance, MaintenanceStatus.IN_PROGRESS, "complete")

        maintenance.status = MaintenanceStatus.COMPLETED.value
        maintenance.completed_date = data.completed_date or datetime.now(timezone.utc)
        if data.cost is not None:
            maintenance.cost = data.cost
        if data.notes:
            maintenance.notes = data.notes

        asset = lock_asset(db, maintenance.asset_id)
        still_open = db.query(Maintenance).filter(
            Maintenance.asset_id == asset.id,
            Maintenance.id != maintenance.id,
            Maintenance.status == MaintenanceStatus.IN_PROGRESS.value,
        ).first()
        if still_open:
            logger.info("Asset %s stays in repair for maintenance %s", asset.id, still_open.id)
        else:
            _restore_asset(asset)

    logger.info("Maintenance %s completed by %s", maintenance_id, actor_id)
    return get_maintenance_by_id(db, maintenance_id)


def cancel_maintenance(db: Session, maintenance_id: UUID, actor_id: UUID) -> MaintenanceOut:
    with atomic(db):
        maintenance = _lock_maintenance(db, maintenance_id)
        _require_status(maintenance, MaintenanceStatus.SCHEDULED, "be cancelled")
        maintenance.status = MaintenanceStatus.CANCELLED.value

    logger.info("Maintenance %s cancelled by %s", maintenance_id, actor_id)
    return get_maintenance_by_id(db, maintenance_id)


def get_maintenance_history(db: Session, params: MaintenanceRequest) -> List[MaintenanceOut]:
    query = _maintenance_query(db)

    if params.asset_id:
        query = query.filter(Maintenance.asset_id == params.asset_id)
    if params.type:
        query = query.filter(Maintenance.type == params.type.value)
    if params.status:
        query = query.filter(Maintenance.status == params.status.value)
    if params.start_date:
        query = query.filter(Maintenance.scheduled_date >= params.start_date)
    if params.end_date:
        query = query.filter(Maintenance.scheduled_date <= params.end_date)

    records = query.order_by(Maintenance.scheduled_date.desc()).all()
    return [MaintenanceOut.model_validate(m) for m in records]


def get_upcoming_maintenance(db: Session, days: Optional[int] = None) -> List[MaintenanceOut]:
    now = datetime.now(timezone.utc)
    until = now + timedelta(days=days if days is not None else settings.DEFAULT_UPCOMING_DAYS)

    records = (
        _maintenance_query(db)
        .filter(
            Maintenance.status.in_([
                MaintenanceStatus.SCHEDULED.value,
                MaintenanceStatus.IN_PROGRESS.value,
            ]),
            Maintenance.scheduled_date >= now,
            Maintenance.scheduled_date <= until,
        )
        .order_by(Maintenance.scheduled_date.asc())
        .all()
    )
    return [MaintenanceOut.model_validate(m) for m in records]


def get_maintenance_by_asset(db: Session, asset_id: UUID) -> List[MaintenanceOut]:
    get_asset_or_404(db, asset_id)
    return get_maintenance_history(db, MaintenanceRequest(asset_id=asset_id))


def get_maintenance_by_id(db: Session, maintenance_id: UUID) -> MaintenanceOut:
    maintenance = _maintenance_query(db).filter(
        Maintenance.id == maintenance_id).first()
    if not maintenance:
        raise NotFoundError("Maintenance", maintenance_id)
    return MaintenanceOut.model_validate(maintenance)
