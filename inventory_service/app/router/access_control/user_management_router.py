from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, allow_inventory_access, validate_current_token
from shared.core.database import get_db
from shared.core.permissions import can_view_all_assets
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.access_control import user_management_crud as crud
from ...schemas.access_control.user_management_schemas import (
    PasswordChange, UserCreate, UserListResponse, UserOut, UserRequest, UserUpdate)
from ...schemas.assets.assets_schemas import AssetOut

router = APIRouter(
    prefix="/api/users",
    tags=["User Management"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/", response_model=UserListResponse)
def get_users(
        params: UserRequest = Depends(),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    return crud.get_users(db, params)


@router.get("/responsibles", response_model=List[UserOut])
def get_responsible_users(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_inventory_access)):
    return crud.get_responsible_users(db)


@router.put("/me/password", response_model=None)
def change_password(
        data: PasswordChange,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    crud.change_password(db, current_user.actor_id, data)
    return success_response(
        data=None,
        message="Password updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    return crud.get_user_by_id(db, user_id)


@router.get("/{user_id}/assets", response_model=List[AssetOut])
def get_user_assets(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    if user_id != current_user.actor_id and not can_view_all_assets(current_user.role):
        return error_response(
            message="Access forbidden: you can only view your own assets",
            status_code=str(AppStatusCode.AUTHORIZATION_FORBIDDEN),
            http_status=status.HTTP_403_FORBIDDEN
        )
    return crud.get_user_assets(db, user_id)


@router.post("/", response_model=None)
def create_user(
        user: UserCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    result = crud.create_user(db, user)
    return success_response(
        data=result,
        message="User created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.put("/{user_id}", response_model=None)
def update_user(
        user_id: UUID,
        user: UserUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    result = crud.update_user(db, user_id, user)
    return success_response(
        data=result,
        message="User updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.delete("/{user_id}", response_model=None)
def delete_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    result = crud.delete_user(db, user_id, current_user.actor_id)
    message = "User deleted successfully" if result.deleted else "User deactivated, it is referenced by inventory records"
    return success_response(
        data=result,
        message=message,
        status_code=AppStatusCode.DELETED_SUCCESSFULLY)
