from pydantic import BaseModel
from typing import Any, Generic, Optional, TypeVar, Union
from uuid import UUID

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: str
    email: str
    role: str
    name: Optional[str] = None
    is_active: Optional[bool] = None
    exp: Optional[int] = None

    @property
    def actor_id(self) -> UUID:
        return UUID(self.user_id)


class CommonQueryParams(EmptyStringModel):
    search: Optional[str] = None
    skip: Optional[int] = 0
    limit: Optional[int] = 100


class Lookup(BaseModel):
    id: Union[str, UUID]  # accepts both UUID and str
    name: str

    model_config = {"from_attributes": True}


class JsonOutResult(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None
    status_code: str


class MessageOut(BaseModel):
    message: str
    details: Optional[Any] = None
