from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from shared.core.schemas import CommonQueryParams
from shared.utils.enums import UserRole


class UserBase(EmptyStringModel):
    email: EmailStr
    name: Optional[str] = Field(None, max_length=200)
    role: UserRole = UserRole.ASSET_RESPONSIBLE


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)


class UserUpdate(EmptyStringModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, max_length=200)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class UserOut(BaseModel):
    id: UUID
    email: str
    name: Optional[str] = None
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserRequest(CommonQueryParams):
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class UserListResponse(BaseModel):
    users: List[UserOut]
    total: int


class UserDeleteResult(BaseModel):
    id: UUID
    deleted: bool
    deactivated: bool
