# app/schemas/assets/movement_schemas.py
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.inventory_enum import MovementSubtype, MovementType
from .common_schemas import AssetSummary, UserSummary


class MovementCreate(BaseModel):
    asset_id: UUID
    movement_type: MovementSubtype
    description: str = Field(..., min_length=1, max_length=500)
    cost: Optional[float] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, gt=0)
    date: Optional[datetime] = None
    notes: Optional[str] = None


class MovementRequest(EmptyStringModel):
    asset_id: Optional[UUID] = None
    type: Optional[MovementType] = None
    movement_type: Optional[MovementSubtype] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class MovementOut(BaseModel):
    id: UUID
    asset_id: UUID
    type: str
    movement_type: str
    description: str
    cost: Optional[float] = None
    quantity: int
    user_id: UUID
    date: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    asset: Optional[AssetSummary] = None
    user: Optional[UserSummary] = None

    model_config = {"from_attributes": True}
