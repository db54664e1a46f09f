from typing import Optional
from uuid import UUID
from pydantic import BaseModel


class UserSummary(BaseModel):
    id: UUID
    email: str
    name: Optional[str] = None
    role: str

    model_config = {"from_attributes": True}


class CategorySummary(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class AssetSummary(BaseModel):
    id: UUID
    code: str
    name: str
    status: str
    category: Optional[CategorySummary] = None

    model_config = {"from_attributes": True}
