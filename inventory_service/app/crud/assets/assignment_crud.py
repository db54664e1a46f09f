# app/crud/assets/assignment_crud.py
"""
Asset custody state machine.

An asset is held by at most one user at a time. Each holding is an
AssetAssignment row; the open one has status ACTIVE and is mirrored on the
asset (``assigned_to_id``, ``status = IN_USE``). assign, return and transfer
lock the asset row, check the open assignment and perform every write in a
single transaction. The partial unique index on ``asset_assignments``
backs the same rule in the database.
"""
import logging
from typing import List, Optional
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session, joinedload

from shared.core.config import settings
from shared.core.database import atomic
from shared.core.exceptions import ConflictError, InactiveUserError, InvalidStateError, NotFoundError
from shared.models.users import Users
from ...enum.inventory_enum import AssetStatus, AssignmentStatus, MovementSubtype, MovementType
from ...models.assets.asset_assignments import AssetAssignment
from ...models.assets.assets import Asset
from ...schemas.assets.assignment_schemas import (
    AssignmentCreate, AssignmentOut, AssignmentRequest, AssignmentReturn, AssignmentTransfer)
from .assets_crud import get_asset_or_404, lock_asset
from .movement_crud import record_movement

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# HELPERS
# ----------------------------------------------------------------------

def _assignment_query(db: Session):
    return db.query(AssetAssignment).options(
        joinedload(AssetAssignment.asset).joinedload(Asset.category),
        joinedload(AssetAssignment.assigned_to),
        joinedload(AssetAssignment.assigned_by),
    )


def get_active_assignment(db: Session, asset_id: UUID) -> Optional[AssetAssignment]:
    return (
        db.query(AssetAssignment)
        .filter(
            AssetAssignment.asset_id == asset_id,
            AssetAssignment.status == AssignmentStatus.ACTIVE.value,
        )
        .first()
    )


def _get_assignable_user(db: Session, user_id: UUID) -> Users:
    user = db.query(Users).filter(Users.id == user_id).first()
    if not user:
        raise NotFoundError("User", user_id)
    if not user.is_active:
        raise InactiveUserError(user_id)
    return user


def _describe(asset: Asset, user: Users) -> str:
    return f"{asset.code} - {asset.name} -> {user.name or user.email}"


# ----------------------------------------------------------------------
# STATE TRANSITIONS
# ----------------------------------------------------------------------

def assign_asset(db: Session, data: AssignmentCreate, actor_id: UUID) -> AssignmentOut:
    with atomic(db):
        asset = lock_asset(db, data.asset_id)

        if asset.assigned_to_id is not None or get_active_assignment(db, asset.id):
            logger.warning("Asset %s already assigned, refusing assignment to %s",
                           asset.id, data.assigned_to_id)
            raise ConflictError("Asset is already assigned",
                                {"asset_id": str(asset.id)})

        if asset.status == AssetStatus.DECOMMISSIONED.value:
            raise InvalidStateError("Decommissioned assets cannot be assigned",
                                    current=asset.status,
                                    required=AssetStatus.AVAILABLE.value)

        user = _get_assignable_user(db, data.assigned_to_id)
        now = datetime.now(timezone.utc)

        assignment = AssetAssignment(
            asset_id=asset.id,
            assigned_to_id=user.id,
            assigned_by_id=actor_id,
            status=AssignmentStatus.ACTIVE.value,
            assigned_at=now,
            location=data.location,
            reason=data.reason,
            notes=data.notes,
        )
        db.add(assignment)

        asset.assigned_to_id = user.id
        asset.assigned_at = now
        asset.status = AssetStatus.IN_USE.value
        asset.current_location = data.location

        record_movement(
            db, asset.id, MovementType.SALIDA, MovementSubtype.ASIGNACION,
            f"Assignment: {_describe(asset, user)}", actor_id,
            date=now, notes=data.reason)

    logger.info("Asset %s assigned to %s by %s",
                data.asset_id, data.assigned_to_id, actor_id)
    return get_assignment_by_id(db, assignment.id)


def return_asset(db: Session, asset_id: UUID, data: AssignmentReturn, actor_id: UUID) -> AssignmentOut:
    with atomic(db):
        asset = lock_asset(db, asset_id)
        assignment = get_active_assignment(db, asset.id)
        if not assignment:
            logger.warning("Return refused, asset %s has no active assignment", asset_id)
            raise InvalidStateError("Asset has no active assignment",
                                    current=asset.status,
                                    required=AssignmentStatus.ACTIVE.value)

        now = datetime.now(timezone.utc)
        assignment.status = AssignmentStatus.RETURNED.value
        assignment.returned_at = now
        if data.notes:
            assignment.notes = data.notes

        asset.assigned_to_id = None
        asset.assigned_at = None
        asset.current_location = None
        asset.status = AssetStatus.AVAILABLE.value
        asset.building = settings.RETURN_BUILDING
        asset.office = settings.RETURN_OFFICE

        record_movement(
            db, asset.id, MovementType.ENTRADA, MovementSubtype.DEVOLUCION,
            f"Return: {asset.code} - {asset.name}", actor_id,
            date=now, notes=data.notes)

    logger.info("Asset %s returned by %s", asset_id, actor_id)
    return get_assignment_by_id(db, assignment.id)


def transfer_asset(db: Session, asset_id: UUID, data: AssignmentTransfer, actor_id: UUID) -> AssignmentOut:
    with atomic(db):
        asset = lock_asset(db, asset_id)
        current = get_active_assignment(db, asset.id)
        if not current:
            raise InvalidStateError("Asset has no active assignment",
                                    current=asset.status,
                                    required=AssignmentStatus.ACTIVE.value)

        if current.assigned_to_id == data.new_assigned_to_id:
            logger.warning("Transfer of asset %s to its current holder refused", asset_id)
            raise ConflictError("Asset is already assigned to this user",
                                {"user_id": str(data.new_assigned_to_id)})

        user = _get_assignable_user(db, data.new_assigned_to_id)
        now = datetime.now(timezone.utc)

        current.status = AssignmentStatus.TRANSFERRED.value
        current.returned_at = now
        current.notes = data.notes or "Transferred"
        # the old row must stop being ACTIVE before the new one is inserted
        db.flush()

        if data.building or data.office:
            location = " - ".join(p for p in (data.building, data.office) if p)
        else:
            location = current.location

        assignment = AssetAssignment(
            asset_id=asset.id,
            assigned_to_id=user.id,
            assigned_by_id=actor_id,
            status=AssignmentStatus.ACTIVE.value,
            assigned_at=now,
            location=location,
            reason=data.reason or "Transfer",
            notes=data.notes,
        )
        db.add(assignment)

        asset.assigned_to_id = user.id
        asset.assigned_at = now
        asset.current_location = location
        if data.building:
            asset.building = data.building
        if data.office:
            asset.office = data.office

        record_movement(
            db, asset.id, MovementType.SALIDA, MovementSubtype.TRANSFERENCIA_OUT,
            f"Transfer: {_describe(asset, user)}", actor_id,
            date=now, notes=data.reason)

    logger.info("Asset %s transferred to %s by %s",
                asset_id, data.new_assigned_to_id, actor_id)
    return get_assignment_by_id(db, assignment.id)


# ----------------------------------------------------------------------
# READS
# ----------------------------------------------------------------------

def get_assignment_history(db: Session, params: AssignmentRequest) -> List[AssignmentOut]:
    query = _assignment_query(db)

    if params.asset_id:
        query = query.filter(AssetAssignment.asset_id == params.asset_id)
    if params.user_id:
        query = query.filter(AssetAssignment.assigned_to_id == params.user_id)
    if params.status:
        query = query.filter(AssetAssignment.status == params.status.value)

    assignments = query.order_by(AssetAssignment.assigned_at.desc()).all()
    return [AssignmentOut.model_validate(a) for a in assignments]


def get_active_assignments(db: Session) -> List[AssignmentOut]:
    return get_assignment_history(db, AssignmentRequest(status=AssignmentStatus.ACTIVE))


def get_assignment_by_id(db: Session, assignment_id: UUID) -> AssignmentOut:
    assignment = _assignment_query(db).filter(
        AssetAssignment.id == assignment_id).first()
    if not assignment:
        raise NotFoundError("Assignment", assignment_id)
    return AssignmentOut.model_validate(assignment)


def get_assignments_by_asset(db: Session, asset_id: UUID) -> List[AssignmentOut]:
    get_asset_or_404(db, asset_id)
    return get_assignment_history(db, AssignmentRequest(asset_id=asset_id))


def get_assignments_by_user(db: Session, user_id: UUID) -> List[AssignmentOut]:
    if not db.query(Users).filter(Users.id == user_id).first():
        raise NotFoundError("User", user_id)
    return get_assignment_history(db, AssignmentRequest(user_id=user_id))
