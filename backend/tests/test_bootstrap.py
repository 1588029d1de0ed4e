from __future__ import annotations

import sqlalchemy as sa

from tablemenu.core.security import verify_password
from tablemenu.models import AdminMenuItem, MenuItem, Price, Role, User
from tablemenu.services.bootstrap import (
    ADMIN_NAVIGATION,
    DEMO_MENU,
    DEMO_TABLE_TYPES,
    ensure_admin_access,
    seed_demo_menu,
)
from tablemenu.services.menu import project_menu


def _count(db, model) -> int:
    return db.execute(sa.select(sa.func.count()).select_from(model)).scalar_one()


def test_ensure_admin_access_is_idempotent(db):
    first = ensure_admin_access(db, "owner", "changeme1")
    second = ensure_admin_access(db, "owner", "another-pass")

    assert first.id == second.id
    assert _count(db, Role) == 1
    assert _count(db, User) == 1
    assert _count(db, AdminMenuItem) == len(ADMIN_NAVIGATION)
    assert verify_password("changeme1", second.password_hash)


def test_admin_role_can_see_every_navigation_entry(db):
    ensure_admin_access(db, "owner", "changeme1")

    entries = db.execute(sa.select(AdminMenuItem)).scalars().all()
    assert all([r.name for r in e.roles] == ["admin"] for e in entries)


def test_seed_demo_menu_once(db):
    assert seed_demo_menu(db) == len(DEMO_MENU)
    assert seed_demo_menu(db) == 0

    assert _count(db, MenuItem) == len(DEMO_MENU)
    assert _count(db, Price) == len(DEMO_MENU) * len(DEMO_TABLE_TYPES)


def test_seeded_menu_is_priced_per_table_type(db):
    seed_demo_menu(db)

    steak = next(e for e in project_menu(db, category_name="food") if e.name == "Ribeye Steak")
    assert steak.prices == {"economy": 26.99, "standard": 32.99, "premium": 38.99, "vip": 45.99, "royal": 54.99}
    assert project_menu(db, table_type_name="royal")[0].prices.keys() == {"royal"}
