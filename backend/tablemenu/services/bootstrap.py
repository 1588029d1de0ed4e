"""Idempotent bootstrap data: admin access and a demo menu."""
from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.orm import Session

from tablemenu.core.config import settings
from tablemenu.core.security import hash_password
from tablemenu.models import AdminMenuItem, Category, MenuItem, Role, TableType, User
from tablemenu.schemas.menu_item import MenuItemIn, PriceIn
from tablemenu.services.pricing import create_menu_item

ADMIN_NAVIGATION = [
    # href, icon, title, description, color
    ("/admin/menu-items", "utensils", "Menu Items", "Manage dishes, drinks and prices", "text-orange-500"),
    ("/admin/categories", "tags", "Categories", "Manage menu categories", "text-sky-500"),
    ("/admin/table-types", "armchair", "Table Types", "Manage table types and their order", "text-emerald-500"),
    ("/admin/users", "users", "Users", "Manage admin users and roles", "text-violet-500"),
]

DEMO_CATEGORIES = [
    ("appetizer", "Appetizer"),
    ("food", "Main Course"),
    ("dessert", "Dessert"),
    ("drink", "Beverage"),
    ("alcohol", "Alcoholic Beverage"),
]

DEMO_TABLE_TYPES = [
    ("economy", "Economy", 1),
    ("standard", "Standard", 2),
    ("premium", "Premium", 3),
    ("vip", "VIP", 4),
    ("royal", "Royal", 5),
]

# Prices follow DEMO_TABLE_TYPES order.
DEMO_MENU = [
    ("Bruschetta", "Toasted bread with tomatoes, garlic, and basil", "appetizer", (6.99, 8.99, 10.99, 12.99, 15.99)),
    ("Spring Rolls", "Crispy vegetable spring rolls with sweet chili sauce", "appetizer", (5.99, 7.99, 9.99, 11.99, 13.99)),
    ("Caesar Salad", "Fresh romaine lettuce with Caesar dressing", "food", (9.99, 12.99, 15.99, 18.99, 22.99)),
    ("Grilled Salmon", "Atlantic salmon with lemon butter sauce", "food", (19.99, 24.99, 28.99, 32.99, 38.99)),
    ("Ribeye Steak", "12oz prime ribeye with garlic butter", "food", (26.99, 32.99, 38.99, 45.99, 54.99)),
    ("Pasta Carbonara", "Creamy pasta with bacon and parmesan", "food", (12.99, 16.99, 19.99, 22.99, 26.99)),
    ("Chocolate Lava Cake", "Warm chocolate cake with vanilla ice cream", "dessert", (6.99, 8.99, 10.99, 12.99, 15.99)),
    ("Tiramisu", "Classic Italian dessert with coffee and mascarpone", "dessert", (7.99, 9.99, 11.99, 13.99, 16.99)),
    ("Fresh Orange Juice", "Freshly squeezed orange juice", "drink", (3.99, 4.99, 5.99, 6.99, 8.99)),
    ("Cappuccino", "Espresso with steamed milk foam", "drink", (3.49, 4.49, 5.49, 6.49, 7.99)),
    ("Iced Tea", "House brewed iced tea with lemon", "drink", (2.99, 3.49, 4.49, 5.49, 6.99)),
    ("Red Wine", "Glass of house red wine", "alcohol", (7.99, 9.99, 12.99, 15.99, 19.99)),
    ("White Wine", "Glass of house white wine", "alcohol", (7.99, 9.99, 12.99, 15.99, 19.99)),
    ("Craft Beer", "Local craft beer on tap", "alcohol", (5.99, 6.99, 8.99, 10.99, 12.99)),
]


def ensure_admin_access(db: Session, username: str, password: str) -> User:
    role = db.execute(sa.select(Role).where(Role.name == settings.ADMIN_ROLE_NAME)).scalar_one_or_none()
    if role is None:
        role = Role(name=settings.ADMIN_ROLE_NAME, display_name="Administrator")
        db.add(role)
        db.flush()

    for order, (href, icon, title, description, color) in enumerate(ADMIN_NAVIGATION, start=1):
        entry = db.execute(sa.select(AdminMenuItem).where(AdminMenuItem.href == href)).scalar_one_or_none()
        if entry is None:
            entry = AdminMenuItem(
                href=href,
                icon_name=icon,
                title=title,
                description=description,
                icon_color=color,
                order=order,
            )
            db.add(entry)
        if role not in entry.roles:
            entry.roles.append(role)

    user = db.execute(sa.select(User).where(User.username == username)).scalar_one_or_none()
    if user is None:
        user = User(username=username, password_hash=hash_password(password), role_id=role.id)
        db.add(user)
    db.commit()
    return user


def seed_demo_menu(db: Session) -> int:
    """Create the demo catalog when the menu is empty; returns items created."""
    if db.execute(sa.select(sa.func.count()).select_from(MenuItem)).scalar_one() > 0:
        return 0

    categories = {}
    for name, display_name in DEMO_CATEGORIES:
        category = db.execute(sa.select(Category).where(Category.name == name)).scalar_one_or_none()
        if category is None:
            category = Category(name=name, display_name=display_name)
            db.add(category)
        categories[name] = category

    table_types = []
    for name, display_name, order in DEMO_TABLE_TYPES:
        table_type = db.execute(sa.select(TableType).where(TableType.name == name)).scalar_one_or_none()
        if table_type is None:
            table_type = TableType(name=name, display_name=display_name, order=order)
            db.add(table_type)
        table_types.append(table_type)
    db.commit()

    for name, description, category_name, amounts in DEMO_MENU:
        create_menu_item(
            db,
            MenuItemIn(
                name=name,
                description=description,
                category_id=categories[category_name].id,
                prices=[
                    PriceIn(table_type_id=table_type.id, amount=amount)
                    for table_type, amount in zip(table_types, amounts)
                ],
            ),
        )
    return len(DEMO_MENU)
