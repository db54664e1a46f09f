# app/crud/assets/movement_crud.py
import logging
from typing import List, Optional
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session, joinedload

from shared.core.database import atomic
from shared.core.exceptions import InvalidInputError, InvalidStateError, NotFoundError
from ...enum.inventory_enum import (
    AssetStatus, DECOMMISSIONING_SUBTYPES, MANUAL_ENTRY_SUBTYPES, MANUAL_EXIT_SUBTYPES, MovementSubtype, MovementType,
    REACTIVATING_SUBTYPES)
from ...models.assets.asset_movements import AssetMovement
from ...schemas.assets.movement_schemas import MovementCreate, MovementOut, MovementRequest
from .assets_crud import get_asset_or_404, lock_asset

logger = logging.getLogger(__name__)


def record_movement(
    db: Session,
    asset_id: UUID,
    type: MovementType,
    movement_type: MovementSubtype,
    description: str,
    user_id: UUID,
    cost: Optional[float] = None,
    quantity: Optional[int] = None,
    date: Optional[datetime] = None,
    notes: Optional[str] = None,
) -> AssetMovement:
    """Append a ledger row to the current transaction. The caller commits."""
    movement = AssetMovement(
        asset_id=asset_id,
        type=type.value,
        movement_type=movement_type.value,
        description=description,
        cost=cost,
        quantity=quantity or 1,
        user_id=user_id,
        date=date or datetime.now(timezone.utc),
        notes=notes,
    )
    db.add(movement)
    return movement


def _movement_query(db: Session):
    return db.query(AssetMovement).options(
        joinedload(AssetMovement.asset), joinedload(AssetMovement.user))


def get_movement_history(db: Session, params: MovementRequest) -> List[MovementOut]:
    query = _movement_query(db)

    if params.asset_id:
        query = query.filter(AssetMovement.asset_id == params.asset_id)
    if params.type:
        query = query.filter(AssetMovement.type == params.type.value)
    if params.movement_type:
        query = query.filter(
            AssetMovement.movement_type == params.movement_type.value)
    if params.start_date:
        query = query.filter(AssetMovement.date >= params.start_date)
    if params.end_date:
        query = query.filter(AssetMovement.date <= params.end_date)

    movements = query.order_by(AssetMovement.date.desc()).all()
    return [MovementOut.model_validate(m) for m in movements]


def get_movements_by_asset(db: Session, asset_id: UUID) -> List[MovementOut]:
    get_asset_or_404(db, asset_id)
    movements = (
        _movement_query(db)
        .filter(AssetMovement.asset_id == asset_id)
        .order_by(AssetMovement.date.desc())
        .all()
    )
    return [MovementOut.model_validate(m) for m in movements]


def get_movement_by_id(db: Session, movement_id: UUID) -> MovementOut:
    movement = _movement_query(db).filter(
        AssetMovement.id == movement_id).first()
    if not movement:
        raise NotFoundError("Movement", movement_id)
    return MovementOut.model_validate(movement)


def register_entry(db: Session, data: MovementCreate, actor_id: UUID) -> MovementOut:
    if data.movement_type not in MANUAL_ENTRY_SUBTYPES:
        raise InvalidInputError(
            f"'{data.movement_type.value}' cannot be registered as an entry",
            {"allowed": sorted(s.value for s in MANUAL_ENTRY_SUBTYPES)})

    with atomic(db):
        asset = lock_asset(db, data.asset_id)

        if (data.movement_type in REACTIVATING_SUBTYPES
                and asset.status == AssetStatus.DECOMMISSIONED.value):
            asset.status = AssetStatus.AVAILABLE.value
            logger.info("Asset %s back in stock through %s",
                        asset.id, data.movement_type.value)

        movement = record_movement(
            db, asset.id, MovementType.ENTRADA, data.movement_type, data.description, actor_id,
            cost=data.cost, quantity=data.quantity, date=data.date, notes=data.notes)

    logger.info("Entry %s registered on asset %s by %s",
                data.movement_type.value, data.asset_id, actor_id)
    return get_movement_by_id(db, movement.id)


def register_exit(db: Session, data: MovementCreate, actor_id: UUID) -> MovementOut:
    if data.movement_type not in MANUAL_EXIT_SUBTYPES:
        raise InvalidInputError(
            f"'{data.movement_type.value}' cannot be registered as an exit",
            {"allowed": sorted(s.value for s in MANUAL_EXIT_SUBTYPES)})

    with atomic(db):
        asset = lock_asset(db, data.asset_id)

        if data.movement_type in DECOMMISSIONING_SUBTYPES:
            if asset.assigned_to_id is not None:
                logger.warning("Exit %s refused on assigned asset %s",
                               data.movement_type.value, asset.id)
                raise InvalidStateError(
                    "Return the asset before removing it from inventory",
                    current=asset.status, required="unassigned")
            asset.status = AssetStatus.DECOMMISSIONED.value
            asset.current_location = None

        movement = record_movement(
            db, asset.id, MovementType.SALIDA, data.movement_type, data.description, actor_id,
            cost=data.cost, quantity=data.quantity, date=data.date, notes=data.notes)

    logger.info("Exit %s registered on asset %s by %s",
                data.movement_type.value, data.asset_id, actor_id)
    return get_movement_by_id(db, movement.id)
