# app/schemas/assets/assets_schemas.py
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from uuid import UUID
from datetime import date, datetime

from shared.core.schemas import CommonQueryParams
from ...enum.inventory_enum import AssetStatus
from .common_schemas import CategorySummary, UserSummary


class AssetBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category_id: UUID

    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)

    acquisition_cost: Optional[float] = Field(None, gt=0)
    purchase_date: Optional[date] = None
    supplier: Optional[str] = Field(None, max_length=200)
    useful_life: Optional[int] = Field(None, gt=0, le=100)
    residual_value: Optional[float] = Field(None, ge=0)

    building: Optional[str] = Field(None, max_length=100)
    office: Optional[str] = Field(None, max_length=100)
    laboratory: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=200)


class AssetCreate(AssetBase):
    code: str = Field(..., min_length=1, max_length=50)
    status: AssetStatus = AssetStatus.AVAILABLE


class AssetUpdate(BaseModel):
    # code is accepted only to reject changes to it
    code: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category_id: Optional[UUID] = None
    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    acquisition_cost: Optional[float] = Field(None, gt=0)
    purchase_date: Optional[date] = None
    supplier: Optional[str] = Field(None, max_length=200)
    useful_life: Optional[int] = Field(None, gt=0, le=100)
    residual_value: Optional[float] = Field(None, ge=0)
    building: Optional[str] = Field(None, max_length=100)
    office: Optional[str] = Field(None, max_length=100)
    laboratory: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=200)


class AssetStatusChange(BaseModel):
    status: AssetStatus


class AssetOut(BaseModel):
    id: UUID
    code: str
    name: str
    description: Optional[str] = None
    category_id: UUID
    category: Optional[CategorySummary] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    acquisition_cost: Optional[float] = None
    purchase_date: Optional[date] = None
    supplier: Optional[str] = None
    useful_life: Optional[int] = None
    residual_value: Optional[float] = None
    building: Optional[str] = None
    office: Optional[str] = None
    laboratory: Optional[str] = None
    location: Optional[str] = None
    current_location: Optional[str] = None
    status: str
    assigned_to_id: Optional[UUID] = None
    assigned_to: Optional[UserSummary] = None
    assigned_at: Optional[datetime] = None
    created_by_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AssetsRequest(CommonQueryParams):
    category_id: Optional[UUID] = None
    status: Optional[AssetStatus] = None
    building: Optional[str] = None
    office: Optional[str] = None
    laboratory: Optional[str] = None


class AssetsResponse(BaseModel):
    assets: List[AssetOut]
    total: int

    model_config = {"from_attributes": True}


class AssetStats(BaseModel):
    total: int
    by_status: Dict[str, int]
    total_value: float
    created_last_month: int
    recent_assets: List[AssetOut]
