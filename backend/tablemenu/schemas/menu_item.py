from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from tablemenu.schemas.catalog import CategoryOut

# Largest value NUMERIC(10, 2) holds.
MAX_AMOUNT = 99_999_999.99


class PriceIn(BaseModel):
    table_type_id: UUID
    amount: float = Field(..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False)


class MenuItemIn(BaseModel):
    name: str = Field(..., max_length=200)
    description: str | None = Field(default="", max_length=2000)
    image: str | None = Field(default="", max_length=1000)
    category_id: UUID
    is_cook: bool = False
    prices: list[PriceIn] = Field(default_factory=list)


class PriceOut(BaseModel):
    id: UUID
    table_type_id: UUID
    table_type_name: str
    amount: float


class MenuItemOut(BaseModel):
    id: UUID
    name: str
    description: str
    image: str
    category_id: UUID
    category_name: str
    category: CategoryOut
    is_cook: bool
    prices: list[PriceOut]


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class MenuItemPageOut(BaseModel):
    items: list[MenuItemOut]
    pagination: PaginationOut


def menu_item_out(item) -> MenuItemOut:
    prices = sorted(item.prices, key=lambda p: (p.table_type.order, p.table_type.name))
    return MenuItemOut(
        id=item.id,
        name=item.name,
        description=item.description or "",
        image=item.image or "",
        category_id=item.category_id,
        category_name=item.category.name,
        category=CategoryOut.model_validate(item.category),
        is_cook=bool(item.is_cook),
        prices=[
            PriceOut(
                id=p.id,
                table_type_id=p.table_type_id,
                table_type_name=p.table_type.name,
                amount=p.amount,
            )
            for p in prices
        ],
    )


class MenuEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str
    image: str
    category: str
    prices: dict[str, float] = Field(default_factory=dict)
