# app/schemas/assets/incident_schemas.py
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.inventory_enum import IncidentStatus, IncidentType
from .common_schemas import AssetSummary, UserSummary


class IncidentCreate(BaseModel):
    asset_id: UUID
    type: IncidentType
    description: str = Field(..., min_length=1)
    cost: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class IncidentResolve(BaseModel):
    resolution: str = Field(..., min_length=1)
    resolved_date: Optional[datetime] = None
    cost: Optional[float] = Field(None, ge=0)


class IncidentRequest(EmptyStringModel):
    asset_id: Optional[UUID] = None
    type: Optional[IncidentType] = None
    status: Optional[IncidentStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class IncidentOut(BaseModel):
    id: UUID
    asset_id: UUID
    type: str
    status: str
    description: str
    reported_by_id: UUID
    reported_date: Optional[datetime] = None
    resolved_date: Optional[datetime] = None
    resolution: Optional[str] = None
    cost: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    asset: Optional[AssetSummary] = None
    reported_by: Optional[UserSummary] = None

    model_config = {"from_attributes": True}
