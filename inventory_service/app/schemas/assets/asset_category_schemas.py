# app/schemas/assets/asset_category_schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID


class AssetCategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    parent_id: Optional[UUID] = None
    default_cost: Optional[float] = Field(None, gt=0)
    default_useful_life: Optional[int] = Field(None, gt=0, le=100)
    default_residual_value: Optional[float] = Field(None, ge=0)


class AssetCategoryCreate(AssetCategoryBase):
    pass


class AssetCategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    parent_id: Optional[UUID] = None
    default_cost: Optional[float] = Field(None, gt=0)
    default_useful_life: Optional[int] = Field(None, gt=0, le=100)
    default_residual_value: Optional[float] = Field(None, ge=0)


class AssetCategoryOut(AssetCategoryBase):
    id: UUID
    asset_count: int = 0
    subcategory_count: int = 0

    model_config = {
        "from_attributes": True
    }


class CategoryAssetOut(BaseModel):
    id: UUID
    code: str
    name: str

    model_config = {"from_attributes": True}


class AssetCategoryDetailOut(AssetCategoryOut):
    assets: List[CategoryAssetOut] = []


class CategoryDefaultsOut(BaseModel):
    category_id: UUID
    acquisition_cost: Optional[float] = None
    useful_life: Optional[int] = None
    residual_value: Optional[float] = None
    inherited_from: Optional[UUID] = None
