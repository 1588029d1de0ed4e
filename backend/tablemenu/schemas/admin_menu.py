from uuid import UUID

from pydantic import BaseModel, Field


class AdminMenuItemOut(BaseModel):
    id: UUID
    href: str
    icon_name: str
    title: str
    description: str
    icon_color: str
    order: int
    allowed_roles: list[str] = Field(default_factory=list)
