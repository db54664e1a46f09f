# app/schemas/assets/maintenance_schemas.py
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.inventory_enum import MaintenanceStatus, MaintenanceType
from .common_schemas import AssetSummary, UserSummary


class MaintenanceCreate(BaseModel):
    asset_id: UUID
    type: MaintenanceType
    scheduled_date: datetime
    description: str = Field(..., min_length=1)
    performed_by: Optional[str] = Field(None, max_length=200)
    cost: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class MaintenanceComplete(BaseModel):
    completed_date: Optional[datetime] = None
    cost: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class MaintenanceRequest(EmptyStringModel):
    asset_id: Optional[UUID] = None
    type: Optional[MaintenanceType] = None
    status: Optional[MaintenanceStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class MaintenanceOut(BaseModel):
    id: UUID
    asset_id: UUID
    type: str
    status: str
    scheduled_date: datetime
    completed_date: Optional[datetime] = None
    description: str
    performed_by: Optional[str] = None
    cost: Optional[float] = None
    notes: Optional[str] = None
    user_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    asset: Optional[AssetSummary] = None
    user: Optional[UserSummary] = None

    model_config = {"from_attributes": True}
