from uuid import uuid4

import pytest

from shared.core.exceptions import InvalidInputError, InvalidStateError, NotFoundError
from inventory_service.app.crud.assets import assignment_crud, movement_crud
from inventory_service.app.enum.inventory_enum import AssetStatus, MovementSubtype, MovementType
from inventory_service.app.models.assets.asset_movements import AssetMovement
from inventory_service.app.schemas.assets.assignment_schemas import AssignmentCreate
from inventory_service.app.schemas.assets.movement_schemas import MovementCreate, MovementRequest


def _movement(asset, subtype, **extra):
    return MovementCreate(asset_id=asset.id, movement_type=subtype, description="Ledger entry", **extra)


def test_entry_appends_ledger_row(db, asset, manager):
    result = movement_crud.register_entry(
        db, _movement(asset, MovementSubtype.COMPRA, cost=999.5, quantity=2), manager.id)

    assert result.type == MovementType.ENTRADA.value
    assert result.movement_type == MovementSubtype.COMPRA.value
    assert result.quantity == 2
    assert result.cost == 999.5
    assert result.user_id == manager.id
    db.refresh(asset)
    assert asset.status == AssetStatus.AVAILABLE.value


def test_entry_reactivates_decommissioned_asset(db, make_asset, manager):
    gone = make_asset(status=AssetStatus.DECOMMISSIONED)

    movement_crud.register_entry(db, _movement(gone, MovementSubtype.DONACION_IN), manager.id)

    db.refresh(gone)
    assert gone.status == AssetStatus.AVAILABLE.value


def test_exit_decommissions(db, asset, manager):
    result = movement_crud.register_exit(db, _movement(asset, MovementSubtype.BAJA), manager.id)

    db.refresh(asset)
    assert result.type == MovementType.SALIDA.value
    assert asset.status == AssetStatus.DECOMMISSIONED.value


def test_non_removing_exit_keeps_status(db, asset, manager):
    movement_crud.register_exit(db, _movement(asset, MovementSubtype.TRANSFERENCIA_OUT), manager.id)

    db.refresh(asset)
    assert asset.status == AssetStatus.AVAILABLE.value


def test_removing_exit_refused_on_assigned_asset(db, asset, responsible, manager):
    assignment_crud.assign_asset(
        db, AssignmentCreate(asset_id=asset.id, assigned_to_id=responsible.id), manager.id)
    before = db.query(AssetMovement).count()

    with pytest.raises(InvalidStateError):
        movement_crud.register_exit(db, _movement(asset, MovementSubtype.VENTA), manager.id)

    db.refresh(asset)
    assert asset.status == AssetStatus.IN_USE.value
    assert db.query(AssetMovement).count() == before


@pytest.mark.parametrize("register, subtype", [
    (movement_crud.register_entry, MovementSubtype.BAJA),
    (movement_crud.register_exit, MovementSubtype.COMPRA),
    # custody subtypes are only written by assignments
    (movement_crud.register_entry, MovementSubtype.DEVOLUCION),
    (movement_crud.register_exit, MovementSubtype.ASIGNACION),
])
def test_subtype_must_match_direction(db, asset, manager, register, subtype):
    with pytest.raises(InvalidInputError):
        register(db, _movement(asset, subtype), manager.id)
    assert db.query(AssetMovement).count() == 0


def test_unknown_asset(db, manager):
    with pytest.raises(NotFoundError):
        movement_crud.register_entry(
            db, MovementCreate(asset_id=uuid4(), movement_type=MovementSubtype.COMPRA, description="x"),
            manager.id)


def test_history_filters(db, asset, make_asset, manager):
    other = make_asset(code="MV2")
    movement_crud.register_entry(db, _movement(asset, MovementSubtype.COMPRA), manager.id)
    movement_crud.register_exit(db, _movement(other, MovementSubtype.TRANSFERENCIA_OUT), manager.id)

    exits = movement_crud.get_movement_history(db, MovementRequest(type=MovementType.SALIDA))
    assert [m.asset_id for m in exits] == [other.id]

    purchases = movement_crud.get_movement_history(
        db, MovementRequest(movement_type=MovementSubtype.COMPRA))
    assert [m.asset_id for m in purchases] == [asset.id]

    assert len(movement_crud.get_movements_by_asset(db, asset.id)) == 1
    with pytest.raises(NotFoundError):
        movement_crud.get_movement_by_id(db, uuid4())
