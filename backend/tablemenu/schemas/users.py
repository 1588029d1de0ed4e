from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from tablemenu.schemas.auth import RoleOut


class UserCreateIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=80)
    password: str = Field(..., max_length=128)
    role_id: UUID
    is_active: bool = True


class UserUpdateIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=80)
    password: str | None = Field(default=None, max_length=128)
    role_id: UUID
    is_active: bool | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    role_id: UUID
    is_active: bool
    created_at: datetime | None = None
    role: RoleOut
