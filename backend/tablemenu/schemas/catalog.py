from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CategoryIn(BaseModel):
    name: str = Field(..., max_length=80)
    display_name: str = Field(..., max_length=120)


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    display_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TableTypeIn(BaseModel):
    name: str = Field(..., max_length=80)
    display_name: str = Field(..., max_length=120)
    order: int = 0


class TableTypeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    display_name: str
    order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
