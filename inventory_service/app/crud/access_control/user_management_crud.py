import logging
from typing import List
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from shared.core.database import atomic
from shared.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from shared.models.users import Users
from ...models.assets.asset_assignments import AssetAssignment
from ...models.assets.asset_movements import AssetMovement
from ...models.assets.assets import Asset
from ...models.assets.incidents import Incident
from ...models.assets.maintenance import Maintenance
from ...schemas.access_control.user_management_schemas import (
    PasswordChange, UserCreate, UserDeleteResult, UserListResponse, UserOut, UserRequest, UserUpdate)
from ...schemas.assets.assets_schemas import AssetOut

logger = logging.getLogger(__name__)


def get_user_or_404(db: Session, user_id: UUID) -> Users:
    user = db.query(Users).filter(Users.id == user_id).first()
    if not user:
        raise NotFoundError("User", user_id)
    return user


def _ensure_unique_email(db: Session, email: str, exclude_id: UUID = None):
    query = db.query(Users).filter(func.lower(Users.email) == email.lower())
    if exclude_id is not None:
        query = query.filter(Users.id != exclude_id)
    if query.first():
        raise ConflictError(f"User with email '{email}' already exists")


def get_users(db: Session, params: UserRequest) -> UserListResponse:
    user_query = db.query(Users)

    if params.search:
        search_term = f"%{params.search}%"
        user_query = user_query.filter(or_(
            Users.name.ilike(search_term),
            Users.email.ilike(search_term),
        ))
    if params.role:
        user_query = user_query.filter(Users.role == params.role.value)
    if params.is_active is not None:
        user_query = user_query.filter(Users.is_active == params.is_active)

    total = user_query.with_entities(func.count(Users.id)).scalar()
    users = (
        user_query
        .order_by(Users.created_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return UserListResponse(users=[UserOut.model_validate(u) for u in users], total=total)


def get_user_by_id(db: Session, user_id: UUID) -> UserOut:
    return UserOut.model_validate(get_user_or_404(db, user_id))


def get_responsible_users(db: Session) -> List[UserOut]:
    """Active users that can receive assets."""
    users = (
        db.query(Users)
        .filter(Users.is_active == True)
        .order_by(Users.name.asc())
        .all()
    )
    return [UserOut.model_validate(u) for u in users]


def get_user_assets(db: Session, user_id: UUID) -> List[AssetOut]:
    get_user_or_404(db, user_id)
    assets = (
        db.query(Asset)
        .options(joinedload(Asset.category))
        .filter(Asset.assigned_to_id == user_id)
        .order_by(Asset.assigned_at.desc())
        .all()
    )
    return [AssetOut.model_validate(a) for a in assets]


def create_user(db: Session, user: UserCreate) -> UserOut:
    _ensure_unique_email(db, user.email)

    with atomic(db):
        db_user = Users(
            email=user.email.lower(),
            name=user.name,
            role=user.role.value,
            is_active=True,
        )
        db_user.set_password(user.password)
        db.add(db_user)

    db.refresh(db_user)
    logger.info("User %s created with role %s", db_user.id, db_user.role)
    return UserOut.model_validate(db_user)


def update_user(db: Session, user_id: UUID, user: UserUpdate) -> UserOut:
    db_user = get_user_or_404(db, user_id)
    update_data = user.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in update_data:
        _ensure_unique_email(db, update_data["email"], exclude_id=user_id)
        update_data["email"] = update_data["email"].lower()
    if "role" in update_data:
        update_data["role"] = update_data["role"].value

    with atomic(db):
        for field, value in update_data.items():
            setattr(db_user, field, value)

    db.refresh(db_user)
    return UserOut.model_validate(db_user)


def _has_history(db: Session, user_id: UUID) -> bool:
    checks = (
        db.query(Asset.id).filter(Asset.created_by_id == user_id),
        db.query(AssetAssignment.id).filter(or_(
            AssetAssignment.assigned_to_id == user_id,
            AssetAssignment.assigned_by_id == user_id,
        )),
        db.query(AssetMovement.id).filter(AssetMovement.user_id == user_id),
        db.query(Maintenance.id).filter(Maintenance.user_id == user_id),
        db.query(Incident.id).filter(Incident.reported_by_id == user_id),
    )
    return any(query.first() is not None for query in checks)


def delete_user(db: Session, user_id: UUID, requesting_user_id: UUID) -> UserDeleteResult:
    """Delete a user, or deactivate one whose name is on inventory records."""
    if user_id == requesting_user_id:
        raise InvalidInputError("You cannot delete your own account")

    with atomic(db):
        db_user = get_user_or_404(db, user_id)

        held = db.query(func.count(Asset.id)).filter(
            Asset.assigned_to_id == user_id).scalar() or 0
        if held > 0:
            raise ConflictError(
                f"Cannot delete user, {held} asset(s) are assigned to them",
                {"assets": held})

        if _has_history(db, user_id):
            db_user.is_active = False
            result = UserDeleteResult(id=user_id, deleted=False, deactivated=True)
        else:
            db.delete(db_user)
            result = UserDeleteResult(id=user_id, deleted=True, deactivated=False)

    logger.info("User %s %s by %s", user_id,
                "deleted" if result.deleted else "deactivated", requesting_user_id)
    return result


def change_password(db: Session, user_id: UUID, data: PasswordChange) -> None:
    db_user = get_user_or_404(db, user_id)
    if not db_user.verify_password(data.current_password):
        raise InvalidInputError("Current password is incorrect")

    with atomic(db):
        db_user.set_password(data.new_password)

    logger.info("User %s changed password", user_id)
