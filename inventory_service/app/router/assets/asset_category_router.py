from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_permission, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import CommonQueryParams, Lookup, UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.assets import asset_category_crud as crud
from ...schemas.assets.asset_category_schemas import (
    AssetCategoryCreate, AssetCategoryDetailOut, AssetCategoryUpdate, CategoryDefaultsOut)

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/")
def get_categories(
        params: CommonQueryParams = Depends(),
        db: Session = Depends(get_db)):
    return crud.get_asset_categories(db, params)


@router.get("/lookup", response_model=List[Lookup])
def category_lookup(db: Session = Depends(get_db)):
    return crud.get_asset_category_lookup(db)


@router.get("/{category_id}", response_model=AssetCategoryDetailOut)
def get_category(category_id: UUID, db: Session = Depends(get_db)):
    return crud.get_asset_category_by_id(db, category_id)


@router.get("/{category_id}/defaults", response_model=CategoryDefaultsOut)
def get_category_defaults(category_id: UUID, db: Session = Depends(get_db)):
    return crud.get_category_defaults(db, category_id)


@router.post("/", response_model=None)
def create_category(
        category: AssetCategoryCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("categories", "create"))):
    result = crud.create_asset_category(db, category)
    return success_response(
        data=result,
        message="Category created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.put("/{category_id}", response_model=None)
def update_category(
        category_id: UUID,
        category: AssetCategoryUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("categories", "update"))):
    result = crud.update_asset_category(db, category_id, category)
    return success_response(
        data=result,
        message="Category updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.delete("/{category_id}", response_model=None)
def delete_category(
        category_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_permission("categories", "delete"))):
    result = crud.delete_asset_category(db, category_id)
    return success_response(
        data=result,
        message="Category deleted successfully",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY)
