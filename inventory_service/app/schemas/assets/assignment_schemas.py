# app/schemas/assets/assignment_schemas.py
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.inventory_enum import AssignmentStatus
from .common_schemas import AssetSummary, UserSummary


class AssignmentCreate(BaseModel):
    asset_id: UUID
    assigned_to_id: UUID
    location: Optional[str] = Field(None, max_length=200)
    reason: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class AssignmentReturn(BaseModel):
    notes: Optional[str] = None


class AssignmentTransfer(BaseModel):
    new_assigned_to_id: UUID
    building: Optional[str] = Field(None, max_length=100)
    office: Optional[str] = Field(None, max_length=100)
    reason: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class AssignmentRequest(EmptyStringModel):
    asset_id: Optional[UUID] = None
    user_id: Optional[UUID] = None
    status: Optional[AssignmentStatus] = None


class AssignmentOut(BaseModel):
    id: UUID
    asset_id: UUID
    assigned_to_id: UUID
    assigned_by_id: UUID
    status: str
    assigned_at: Optional[datetime] = None
    returned_at: Optional[datetime] = None
    location: Optional[str] = None
    reason: Optional[str] = None
    notes: Optional[str] = None
    asset: Optional[AssetSummary] = None
    assigned_to: Optional[UserSummary] = None
    assigned_by: Optional[UserSummary] = None

    model_config = {"from_attributes": True}
