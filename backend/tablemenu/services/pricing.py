"""Menu items and their price matrix (menu item x table type -> amount).

Invariants kept here and backed by database constraints:

* ``(name, category_id)`` is unique across menu items;
* a menu item has at most one price per table type.

Updating an item replaces its whole price set: old rows are deleted, the new
set is inserted and the scalar fields are updated in a single transaction.
A table type left out of the new set loses its price.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from tablemenu.core.errors import (
    DuplicateEntry,
    InvalidReference,
    NotFound,
    ValidationError,
    require_fields,
)
from tablemenu.models import Category, MenuItem, Price, TableType
from tablemenu.schemas.menu_item import MenuItemIn, PriceIn
from tablemenu.services.audit import audit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuItemPage:
    items: list[MenuItem]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def pagination(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
            "has_next_page": self.page < self.total_pages,
            "has_prev_page": self.page > 1,
        }


def _with_relations(stmt):
    return stmt.options(
        selectinload(MenuItem.category),
        selectinload(MenuItem.prices).selectinload(Price.table_type),
    ).execution_options(populate_existing=True)


def _duplicate_name() -> DuplicateEntry:
    return DuplicateEntry.for_field(
        "name",
        "Menu item name must be unique within category",
        summary="Menu item with this name already exists in this category",
    )


def _from_integrity_error(exc: IntegrityError) -> Exception | None:
    msg = str(getattr(exc, "orig", exc)).lower()
    if "uq_menu_items_name_category" in msg or "menu_items.name" in msg:
        return _duplicate_name()
    if "uq_prices_menu_item_table_type" in msg or "prices.menu_item_id" in msg:
        return ValidationError.for_field("prices", "Each table type can only be priced once per menu item")
    if "foreign key" in msg:
        return InvalidReference("Invalid category or table type reference")
    return None


def _validated_fields(db: Session, payload: MenuItemIn) -> tuple[str, list[PriceIn]]:
    require_fields(
        "Name and category_id are required",
        name=payload.name,
        category_id=payload.category_id,
    )
    if db.get(Category, payload.category_id) is None:
        raise InvalidReference.for_field(
            "category_id", "Category does not exist", summary="Invalid category reference"
        )

    prices = list(payload.prices or [])
    seen: set[UUID] = set()
    for price in prices:
        if price.table_type_id in seen:
            raise ValidationError.for_field(
                "prices",
                f"Table type {price.table_type_id} is listed more than once",
                summary="Each table type can only be priced once per menu item",
            )
        seen.add(price.table_type_id)

    if seen:
        found = set(db.execute(sa.select(TableType.id).where(TableType.id.in_(seen))).scalars())
        missing = seen - found
        if missing:
            raise InvalidReference(
                "Invalid table type reference",
                details=[
                    {"field": "prices", "message": f"Table type {table_type_id} does not exist"}
                    for table_type_id in sorted(missing, key=str)
                ],
            )
    return payload.name.strip(), prices


def _ensure_unique_name(db: Session, name: str, category_id: UUID, exclude_id: UUID | None = None) -> None:
    stmt = sa.select(MenuItem.id).where(MenuItem.name == name, MenuItem.category_id == category_id)
    if exclude_id is not None:
        stmt = stmt.where(MenuItem.id != exclude_id)
    if db.execute(stmt.limit(1)).first() is not None:
        raise _duplicate_name()


def get_menu_item(db: Session, item_id: UUID) -> MenuItem:
    item = db.execute(_with_relations(sa.select(MenuItem).where(MenuItem.id == item_id))).scalar_one_or_none()
    if item is None:
        raise NotFound("Menu item not found")
    return item


def list_menu_items(
    db: Session,
    *,
    page: int = 1,
    limit: int = 10,
    category_id: UUID | None = None,
    search: str | None = None,
) -> MenuItemPage:
    stmt = sa.select(MenuItem).join(MenuItem.category)
    if category_id is not None:
        stmt = stmt.where(MenuItem.category_id == category_id)
    term = (search or "").strip().lower()
    if term:
        pat = f"%{term}%"
        stmt = stmt.where(
            sa.or_(
                sa.func.lower(MenuItem.name).like(pat),
                sa.func.lower(MenuItem.description).like(pat),
                sa.func.lower(Category.name).like(pat),
                sa.func.lower(Category.display_name).like(pat),
            )
        )

    total = int(db.execute(sa.select(sa.func.count()).select_from(stmt.subquery())).scalar_one())
    rows = db.execute(
        _with_relations(
            stmt.order_by(MenuItem.name, MenuItem.id).offset((page - 1) * limit).limit(limit)
        )
    ).scalars().all()
    return MenuItemPage(items=list(rows), page=page, limit=limit, total=total)


def create_menu_item(db: Session, payload: MenuItemIn, actor_user_id: UUID | None = None) -> MenuItem:
    name, prices = _validated_fields(db, payload)
    _ensure_unique_name(db, name, payload.category_id)

    item = MenuItem(
        name=name,
        description=payload.description or "",
        image=payload.image or "",
        category_id=payload.category_id,
        is_cook=payload.is_cook,
        prices=[Price(table_type_id=p.table_type_id, amount=p.amount) for p in prices],
    )
    try:
        db.add(item)
        db.flush()
        audit(db, actor_user_id, "menu_item", item.id, "created", {"name": name, "prices": len(prices)})
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        mapped = _from_integrity_error(exc)
        if mapped is None:
            raise
        raise mapped from exc

    logger.info("menu item created id=%s name=%r prices=%d", item.id, name, len(prices))
    return get_menu_item(db, item.id)


def update_menu_item(
    db: Session, item_id: UUID, payload: MenuItemIn, actor_user_id: UUID | None = None
) -> MenuItem:
    # Row lock serialises concurrent replacements of the same price set.
    item = db.execute(
        sa.select(MenuItem).where(MenuItem.id == item_id).with_for_update()
    ).scalar_one_or_none()
    if item is None:
        raise NotFound("Menu item not found")
    # Re-read the price set under the lock; a concurrent update may have replaced it.
    db.expire(item, ["prices"])

    try:
        name, prices = _validated_fields(db, payload)
        _ensure_unique_name(db, name, payload.category_id, exclude_id=item.id)

        item.prices.clear()
        # Old rows must be gone before the new set hits the unique constraint.
        db.flush()
        item.prices.extend(Price(table_type_id=p.table_type_id, amount=p.amount) for p in prices)

        item.name = name
        item.description = payload.description or ""
        item.image = payload.image or ""
        item.category_id = payload.category_id
        item.is_cook = payload.is_cook

        audit(db, actor_user_id, "menu_item", item.id, "updated", {"name": name, "prices": len(prices)})
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        mapped = _from_integrity_error(exc)
        if mapped is None:
            raise
        raise mapped from exc
    except Exception:
        db.rollback()
        raise

    logger.info("menu item updated id=%s name=%r prices=%d", item_id, name, len(prices))
    return get_menu_item(db, item_id)


def delete_menu_item(db: Session, item_id: UUID, actor_user_id: UUID | None = None) -> None:
    item = db.get(MenuItem, item_id)
    if item is None:
        raise NotFound("Menu item not found")

    db.delete(item)
    audit(db, actor_user_id, "menu_item", item_id, "deleted", {"name": item.name})
    db.commit()
    logger.info("menu item deleted id=%s", item_id)
