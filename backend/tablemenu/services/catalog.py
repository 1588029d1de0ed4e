"""Reference data: categories and table types.

Both are restricted on delete: a category still used by a menu item, or a
table type still used by a price, cannot be removed.
"""
from __future__ import annotations

import logging
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tablemenu.core.errors import Conflict, DuplicateEntry, NotFound, require_fields
from tablemenu.models import Category, MenuItem, Price, TableType
from tablemenu.schemas.catalog import CategoryIn, TableTypeIn
from tablemenu.services.audit import audit

logger = logging.getLogger(__name__)

CATEGORY_IN_USE = "Cannot delete category with associated menu items"
TABLE_TYPE_IN_USE = "Cannot delete table type with associated prices"


def _duplicate(label: str) -> DuplicateEntry:
    return DuplicateEntry.for_field(
        "name",
        f"{label} name must be unique",
        summary=f"{label} with this name already exists",
    )


def _name_taken(db: Session, model, name: str, exclude_id: UUID | None = None) -> bool:
    stmt = sa.select(model.id).where(model.name == name)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


def _commit_unique(db: Session, label: str, record_audit) -> None:
    try:
        db.flush()
        record_audit()
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise _duplicate(label) from exc


def _commit_delete(db: Session, row, in_use_message: str, record_audit) -> None:
    # A reference may be inserted after the in-use check; the RESTRICT key catches it.
    try:
        db.delete(row)
        record_audit()
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict(in_use_message) from exc


# Categories

def list_categories(db: Session) -> list[Category]:
    return list(db.execute(sa.select(Category).order_by(Category.name)).scalars())


def get_category(db: Session, category_id: UUID) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFound("Category not found")
    return category


def create_category(db: Session, payload: CategoryIn, actor_user_id: UUID | None = None) -> Category:
    require_fields("Name and display_name are required", name=payload.name, display_name=payload.display_name)
    name = payload.name.strip()
    if _name_taken(db, Category, name):
        raise _duplicate("Category")

    category = Category(name=name, display_name=payload.display_name.strip())
    db.add(category)
    _commit_unique(db, "Category", lambda: audit(db, actor_user_id, "category", category.id, "created", {"name": name}))
    db.refresh(category)
    logger.info("category created id=%s name=%r", category.id, name)
    return category


def update_category(
    db: Session, category_id: UUID, payload: CategoryIn, actor_user_id: UUID | None = None
) -> Category:
    category = get_category(db, category_id)
    require_fields("Name and display_name are required", name=payload.name, display_name=payload.display_name)
    name = payload.name.strip()
    if _name_taken(db, Category, name, exclude_id=category.id):
        raise _duplicate("Category")

    category.name = name
    category.display_name = payload.display_name.strip()
    _commit_unique(db, "Category", lambda: audit(db, actor_user_id, "category", category.id, "updated", {"name": name}))
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: UUID, actor_user_id: UUID | None = None) -> None:
    category = get_category(db, category_id)
    in_use = db.execute(
        sa.select(MenuItem.id).where(MenuItem.category_id == category.id).limit(1)
    ).first()
    if in_use is not None:
        raise Conflict(CATEGORY_IN_USE)

    _commit_delete(
        db,
        category,
        CATEGORY_IN_USE,
        lambda: audit(db, actor_user_id, "category", category_id, "deleted", {"name": category.name}),
    )
    logger.info("category deleted id=%s", category_id)


# Table types

def list_table_types(db: Session) -> list[TableType]:
    stmt = sa.select(TableType).order_by(TableType.order, TableType.created_at, TableType.name)
    return list(db.execute(stmt).scalars())


def get_table_type(db: Session, table_type_id: UUID) -> TableType:
    table_type = db.get(TableType, table_type_id)
    if table_type is None:
        raise NotFound("Table type not found")
    return table_type


def create_table_type(db: Session, payload: TableTypeIn, actor_user_id: UUID | None = None) -> TableType:
    require_fields("Name and display_name are required", name=payload.name, display_name=payload.display_name)
    name = payload.name.strip()
    if _name_taken(db, TableType, name):
        raise _duplicate("Table type")

    table_type = TableType(name=name, display_name=payload.display_name.strip(), order=payload.order or 0)
    db.add(table_type)
    _commit_unique(
        db,
        "Table type",
        lambda: audit(db, actor_user_id, "table_type", table_type.id, "created", {"name": name, "order": table_type.order}),
    )
    db.refresh(table_type)
    logger.info("table type created id=%s name=%r", table_type.id, name)
    return table_type


def update_table_type(
    db: Session, table_type_id: UUID, payload: TableTypeIn, actor_user_id: UUID | None = None
) -> TableType:
    table_type = get_table_type(db, table_type_id)
    require_fields("Name and display_name are required", name=payload.name, display_name=payload.display_name)
    name = payload.name.strip()
    if _name_taken(db, TableType, name, exclude_id=table_type.id):
        raise _duplicate("Table type")

    table_type.name = name
    table_type.display_name = payload.display_name.strip()
    table_type.order = payload.order
    _commit_unique(
        db,
        "Table type",
        lambda: audit(db, actor_user_id, "table_type", table_type.id, "updated", {"name": name, "order": payload.order}),
    )
    db.refresh(table_type)
    return table_type


def delete_table_type(db: Session, table_type_id: UUID, actor_user_id: UUID | None = None) -> None:
    table_type = get_table_type(db, table_type_id)
    in_use = db.execute(
        sa.select(Price.id).where(Price.table_type_id == table_type.id).limit(1)
    ).first()
    if in_use is not None:
        raise Conflict(TABLE_TYPE_IN_USE)

    _commit_delete(
        db,
        table_type,
        TABLE_TYPE_IN_USE,
        lambda: audit(db, actor_user_id, "table_type", table_type_id, "deleted", {"name": table_type.name}),
    )
    logger.info("table type deleted id=%s", table_type_id)
