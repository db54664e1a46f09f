# app/router/assets/assets_router.py
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_permission, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.assets import assets_crud as crud
from ...schemas.assets.assets_schemas import (
    AssetCreate, AssetOut, AssetStats, AssetStatusChange, AssetUpdate, AssetsRequest, AssetsResponse)

router = APIRouter(
    prefix="/api/assets",
    tags=["assets"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/", response_model=AssetsResponse)
def get_assets(
        params: AssetsRequest = Depends(),
        db: Session = Depends(get_db)):
    return crud.get_assets(db, params)


@router.get("/stats", response_model=AssetStats)
def get_asset_stats(db: Session = Depends(get_db)):
    return crud.get_asset_stats(db)


@router.get("/code/{code}", response_model=AssetOut)
def get_asset_by_code(code: str, db: Session = Depends(get_db)):
    return crud.get_asset_by_code(db, code)


@router.get("/{asset_id}", response_model=AssetOut)
def get_asset(asset_id: UUID, db: Session = Depends(get_db)):
    return crud.get_asset_by_id(db, asset_id)


@router.post("/", response_model=None)
def create_asset(
        asset: AssetCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("assets", "create"))):
    result = crud.create_asset(db, asset, current_user.actor_id)
    return success_response(
        data=result,
        message="Asset created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.put("/{asset_id}", response_model=None)
def update_asset(
        asset_id: UUID,
        asset: AssetUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("assets", "update"))):
    result = crud.update_asset(db, asset_id, asset)
    return success_response(
        data=result,
        message="Asset updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.patch("/{asset_id}/status", response_model=None)
def change_asset_status(
        asset_id: UUID,
        change: AssetStatusChange,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("assets", "update"))):
    result = crud.change_asset_status(db, asset_id, change, current_user.actor_id)
    return success_response(
        data=result,
        message="Asset status updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.delete("/{asset_id}", response_model=None)
def delete_asset(
        asset_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("assets", "delete"))):
    crud.delete_asset(db, asset_id)
    return success_response(
        data={"id": str(asset_id)},
        message="Asset deleted successfully",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY)
