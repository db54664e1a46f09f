"""Custody state machine: assign, return, transfer."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from shared.core.exceptions import ConflictError, InactiveUserError, InvalidStateError, NotFoundError
from inventory_service.app.crud.assets import assignment_crud
from inventory_service.app.enum.inventory_enum import AssetStatus, AssignmentStatus, MovementSubtype, MovementType
from inventory_service.app.models.assets.asset_assignments import AssetAssignment
from inventory_service.app.models.assets.asset_movements import AssetMovement
from inventory_service.app.schemas.assets.assignment_schemas import (
    AssignmentCreate, AssignmentRequest, AssignmentReturn, AssignmentTransfer)


def _active_rows(db, asset_id):
    return (
        db.query(AssetAssignment)
        .filter(AssetAssignment.asset_id == asset_id,
                AssetAssignment.status == AssignmentStatus.ACTIVE.value)
        .all()
    )


def _assign(db, asset, user, actor, location="Lab 3"):
    return assignment_crud.assign_asset(
        db, AssignmentCreate(asset_id=asset.id, assigned_to_id=user.id, location=location), actor.id)


class TestAssign:

    def test_assign_available_asset(self, db, asset, responsible, manager):
        result = _assign(db, asset, responsible, manager)

        db.refresh(asset)
        assert result.status == AssignmentStatus.ACTIVE.value
        assert result.assigned_to_id == responsible.id
        assert result.assigned_by_id == manager.id
        assert asset.status == AssetStatus.IN_USE.value
        assert asset.assigned_to_id == responsible.id
        assert asset.current_location == "Lab 3"
        assert len(_active_rows(db, asset.id)) == 1

        movements = db.query(AssetMovement).filter(AssetMovement.asset_id == asset.id).all()
        assert len(movements) == 1
        assert movements[0].type == MovementType.SALIDA.value
        assert movements[0].movement_type == MovementSubtype.ASIGNACION.value
        assert movements[0].user_id == manager.id

    def test_assign_already_assigned_asset_conflicts_without_side_effects(
            self, db, asset, responsible, other_responsible, manager):
        _assign(db, asset, responsible, manager)
        assignments_before = db.query(AssetAssignment).count()
        movements_before = db.query(AssetMovement).count()

        with pytest.raises(ConflictError):
            _assign(db, asset, other_responsible, manager, location="Elsewhere")

        db.refresh(asset)
        assert db.query(AssetAssignment).count() == assignments_before
        assert db.query(AssetMovement).count() == movements_before
        assert asset.assigned_to_id == responsible.id
        assert asset.current_location == "Lab 3"

    def test_assign_missing_asset(self, db, responsible, manager):
        with pytest.raises(NotFoundError):
            assignment_crud.assign_asset(
                db, AssignmentCreate(asset_id=uuid4(), assigned_to_id=responsible.id), manager.id)

    def test_assign_missing_user(self, db, asset, manager):
        with pytest.raises(NotFoundError):
            assignment_crud.assign_asset(
                db, AssignmentCreate(asset_id=asset.id, assigned_to_id=uuid4()), manager.id)
        db.refresh(asset)
        assert asset.status == AssetStatus.AVAILABLE.value

    def test_assign_inactive_user(self, db, asset, make_user, manager):
        inactive = make_user(is_active=False)

        with pytest.raises(InactiveUserError) as exc_info:
            _assign(db, asset, inactive, manager)

        assert isinstance(exc_info.value, InvalidStateError)
        db.refresh(asset)
        assert asset.assigned_to_id is None
        assert db.query(AssetAssignment).count() == 0
        assert db.query(AssetMovement).count() == 0

    def test_assign_decommissioned_asset(self, db, make_asset, responsible, manager):
        gone = make_asset(status=AssetStatus.DECOMMISSIONED)

        with pytest.raises(InvalidStateError):
            _assign(db, gone, responsible, manager)


class TestReturn:

    def test_return_closes_assignment(self, db, asset, responsible, manager):
        _assign(db, asset, responsible, manager)

        result = assignment_crud.return_asset(
            db, asset.id, AssignmentReturn(notes="Back in box"), manager.id)

        db.refresh(asset)
        assert result.status == AssignmentStatus.RETURNED.value
        assert result.returned_at is not None
        assert result.notes == "Back in box"
        assert asset.status == AssetStatus.AVAILABLE.value
        assert asset.assigned_to_id is None
        assert asset.current_location is None
        assert asset.building == "warehouse"
        assert _active_rows(db, asset.id) == []

        entry = (
            db.query(AssetMovement)
            .filter(AssetMovement.asset_id == asset.id,
                    AssetMovement.type == MovementType.ENTRADA.value)
            .one()
        )
        assert entry.movement_type == MovementSubtype.DEVOLUCION.value

    def test_return_without_active_assignment(self, db, asset, manager):
        with pytest.raises(InvalidStateError) as exc_info:
            assignment_crud.return_asset(db, asset.id, AssignmentReturn(), manager.id)
        assert exc_info.value.required == AssignmentStatus.ACTIVE.value

    def test_return_then_assign_to_someone_else(self, db, asset, responsible, other_responsible, manager):
        _assign(db, asset, responsible, manager)
        assignment_crud.return_asset(db, asset.id, AssignmentReturn(), manager.id)

        _assign(db, asset, other_responsible, manager)

        active = _active_rows(db, asset.id)
        assert len(active) == 1
        assert active[0].assigned_to_id == other_responsible.id


class TestTransfer:

    def test_transfer_moves_custody(self, db, asset, responsible, other_responsible, manager):
        first = _assign(db, asset, responsible, manager)

        result = assignment_crud.transfer_asset(
            db, asset.id, AssignmentTransfer(new_assigned_to_id=other_responsible.id), manager.id)

        db.refresh(asset)
        old = db.query(AssetAssignment).filter(AssetAssignment.id == first.id).one()
        assert old.status == AssignmentStatus.TRANSFERRED.value
        assert old.returned_at is not None
        assert result.status == AssignmentStatus.ACTIVE.value
        assert result.assigned_to_id == other_responsible.id
        # location carries over when not overridden
        assert result.location == "Lab 3"
        assert asset.assigned_to_id == other_responsible.id
        assert asset.status == AssetStatus.IN_USE.value
        assert len(_active_rows(db, asset.id)) == 1

        transfer_movement = (
            db.query(AssetMovement)
            .filter(AssetMovement.movement_type == MovementSubtype.TRANSFERENCIA_OUT.value)
            .one()
        )
        assert transfer_movement.type == MovementType.SALIDA.value

    def test_transfer_with_location_override(self, db, asset, responsible, other_responsible, manager):
        _assign(db, asset, responsible, manager)

        result = assignment_crud.transfer_asset(
            db, asset.id,
            AssignmentTransfer(new_assigned_to_id=other_responsible.id, building="B2", office="204"),
            manager.id)

        db.refresh(asset)
        assert result.location == "B2 - 204"
        assert asset.building == "B2"
        assert asset.office == "204"

    def test_transfer_to_current_holder_conflicts(self, db, asset, responsible, manager):
        _assign(db, asset, responsible, manager)

        with pytest.raises(ConflictError):
            assignment_crud.transfer_asset(
                db, asset.id,
                AssignmentTransfer(new_assigned_to_id=responsible.id, building="X", reason="again"),
                manager.id)

        active = _active_rows(db, asset.id)
        assert len(active) == 1
        assert active[0].assigned_to_id == responsible.id

    def test_transfer_without_active_assignment(self, db, asset, other_responsible, manager):
        with pytest.raises(InvalidStateError):
            assignment_crud.transfer_asset(
                db, asset.id, AssignmentTransfer(new_assigned_to_id=other_responsible.id), manager.id)

    def test_transfer_to_inactive_user_keeps_current_holder(
            self, db, asset, responsible, make_user, manager):
        _assign(db, asset, responsible, manager)
        inactive = make_user(is_active=False)

        with pytest.raises(InactiveUserError):
            assignment_crud.transfer_asset(
                db, asset.id, AssignmentTransfer(new_assigned_to_id=inactive.id), manager.id)

        active = _active_rows(db, asset.id)
        assert len(active) == 1
        assert active[0].assigned_to_id == responsible.id


def test_full_custody_scenario(db, asset, responsible, other_responsible, manager):
    _assign(db, asset, responsible, manager)
    db.refresh(asset)
    assert asset.status == AssetStatus.IN_USE.value
    assert asset.assigned_to_id == responsible.id
    assert db.query(AssetMovement).filter(AssetMovement.type == MovementType.SALIDA.value).count() == 1

    assignment_crud.transfer_asset(
        db, asset.id, AssignmentTransfer(new_assigned_to_id=other_responsible.id), manager.id)
    db.refresh(asset)
    assert asset.assigned_to_id == other_responsible.id
    statuses = sorted(a.status for a in db.query(AssetAssignment).all())
    assert statuses == [AssignmentStatus.ACTIVE.value, AssignmentStatus.TRANSFERRED.value]

    assignment_crud.return_asset(db, asset.id, AssignmentReturn(), manager.id)
    db.refresh(asset)
    assert asset.status == AssetStatus.AVAILABLE.value
    assert asset.assigned_to_id is None
    u2_row = (
        db.query(AssetAssignment)
        .filter(AssetAssignment.assigned_to_id == other_responsible.id)
        .one()
    )
    assert u2_row.status == AssignmentStatus.RETURNED.value
    assert u2_row.returned_at is not None
    assert _active_rows(db, asset.id) == []


def test_database_rejects_second_active_assignment(db, asset, responsible, other_responsible, manager):
    for user in (responsible, other_responsible):
        db.add(AssetAssignment(
            asset_id=asset.id,
            assigned_to_id=user.id,
            assigned_by_id=manager.id,
            status=AssignmentStatus.ACTIVE.value,
        ))

    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


class TestReads:

    def test_history_filters_and_order(self, db, make_asset, responsible, other_responsible, manager):
        first = make_asset(code="H1")
        second = make_asset(code="H2")
        _assign(db, first, responsible, manager)
        _assign(db, second, other_responsible, manager)
        assignment_crud.return_asset(db, first.id, AssignmentReturn(), manager.id)

        everything = assignment_crud.get_assignment_history(db, AssignmentRequest())
        assert [a.asset_id for a in everything] == [second.id, first.id]

        by_user = assignment_crud.get_assignment_history(db, AssignmentRequest(user_id=responsible.id))
        assert [a.asset_id for a in by_user] == [first.id]

        returned = assignment_crud.get_assignment_history(
            db, AssignmentRequest(status=AssignmentStatus.RETURNED))
        assert len(returned) == 1

        active = assignment_crud.get_active_assignments(db)
        assert [a.asset_id for a in active] == [second.id]

    def test_by_asset_and_user(self, db, asset, responsible, manager):
        created = _assign(db, asset, responsible, manager)

        assert [a.id for a in assignment_crud.get_assignments_by_asset(db, asset.id)] == [created.id]
        assert [a.id for a in assignment_crud.get_assignments_by_user(db, responsible.id)] == [created.id]
        assert assignment_crud.get_assignment_by_id(db, created.id).asset.code == asset.code

    def test_unknown_ids(self, db):
        with pytest.raises(NotFoundError):
            assignment_crud.get_assignment_by_id(db, uuid4())
        with pytest.raises(NotFoundError):
            assignment_crud.get_assignments_by_asset(db, uuid4())
        with pytest.raises(NotFoundError):
            assignment_crud.get_assignments_by_user(db, uuid4())
