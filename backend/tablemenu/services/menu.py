"""Public, priced view of the menu."""
from __future__ import annotations

from collections import defaultdict

import sqlalchemy as sa
from sqlalchemy.orm import Session, contains_eager

from tablemenu.models import Category, MenuItem, Price, TableType
from tablemenu.schemas.menu_item import MenuEntryOut


def project_menu(
    db: Session,
    category_name: str | None = None,
    table_type_name: str | None = None,
) -> list[MenuEntryOut]:
    """Menu items sorted by name, each with a ``{table_type_name: amount}`` map.

    The category filter narrows the items; the table type filter only narrows
    the prices, so an item without a matching price is kept with an empty map.
    """
    stmt = (
        sa.select(MenuItem)
        .join(MenuItem.category)
        .options(contains_eager(MenuItem.category))
        .order_by(MenuItem.name, MenuItem.id)
    )
    if category_name:
        stmt = stmt.where(Category.name == category_name)
    items = db.execute(stmt).scalars().all()
    if not items:
        return []

    price_stmt = (
        sa.select(Price.menu_item_id, TableType.name, Price.amount)
        .join(TableType, TableType.id == Price.table_type_id)
        .where(Price.menu_item_id.in_([item.id for item in items]))
    )
    if table_type_name:
        price_stmt = price_stmt.where(TableType.name == table_type_name)

    prices_by_item: dict = defaultdict(dict)
    for menu_item_id, name, amount in db.execute(price_stmt).all():
        prices_by_item[menu_item_id][name] = float(amount)

    return [
        MenuEntryOut(
            id=item.id,
            name=item.name,
            description=item.description or "",
            image=item.image or "",
            category=item.category.name,
            prices=prices_by_item.get(item.id, {}),
        )
        for item in items
    ]
