from __future__ import annotations

import uuid

import pytest
import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError

from tablemenu.core.errors import DuplicateEntry, InvalidReference, NotFound, ValidationError
from tablemenu.models import MenuItem, Price
from tablemenu.schemas.menu_item import MenuItemIn, PriceIn
from tablemenu.services import pricing
from tablemenu.services.audit import audit_trail
from tests.testkit import price_rows


def _payload(name, category, prices=None, **extra) -> MenuItemIn:
    return MenuItemIn(
        name=name,
        category_id=category.id,
        prices=[PriceIn(table_type_id=tt.id, amount=amount) for tt, amount in (prices or [])],
        **extra,
    )


def test_create_returns_item_with_category_and_priced_table_types(db, catalog):
    item = pricing.create_menu_item(
        db,
        _payload("Fried Rice", catalog.food, [(catalog.dine_in, 5.0), (catalog.takeaway, 4.5)], description="Wok fried"),
    )

    assert item.name == "Fried Rice"
    assert item.description == "Wok fried"
    assert item.category.name == "food"
    assert {p.table_type.name: p.amount for p in item.prices} == {"dine-in": 5.0, "takeaway": 4.5}


def test_create_without_prices_is_allowed(db, catalog):
    item = pricing.create_menu_item(db, _payload("Water", catalog.drink))
    assert item.prices == []
    assert item.image == ""


def test_same_name_twice_in_one_category_is_a_duplicate(db, catalog):
    pricing.create_menu_item(db, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 5.0)]))

    with pytest.raises(DuplicateEntry) as err:
        pricing.create_menu_item(db, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 6.0)]))
    assert err.value.details[0]["field"] == "name"

    count = db.execute(sa.select(sa.func.count()).select_from(MenuItem)).scalar_one()
    assert count == 1


def test_same_name_in_other_category_is_fine(db, catalog):
    pricing.create_menu_item(db, _payload("Lemonade", catalog.food))
    item = pricing.create_menu_item(db, _payload("Lemonade", catalog.drink))
    assert item.category_id == catalog.drink.id


def test_blank_name_is_rejected(db, catalog):
    with pytest.raises(ValidationError) as err:
        pricing.create_menu_item(db, _payload("   ", catalog.food))
    assert err.value.details == [{"field": "name", "message": "name is required"}]


def test_unknown_category_is_an_invalid_reference(db, catalog):
    payload = MenuItemIn(name="Ghost", category_id=uuid.uuid4())
    with pytest.raises(InvalidReference) as err:
        pricing.create_menu_item(db, payload)
    assert err.value.details[0]["field"] == "category_id"


def test_unknown_table_type_is_an_invalid_reference(db, catalog):
    payload = MenuItemIn(
        name="Ghost",
        category_id=catalog.food.id,
        prices=[PriceIn(table_type_id=uuid.uuid4(), amount=1.0)],
    )
    with pytest.raises(InvalidReference):
        pricing.create_menu_item(db, payload)
    assert db.execute(sa.select(sa.func.count()).select_from(MenuItem)).scalar_one() == 0


def test_duplicate_table_type_in_one_request_is_rejected(db, catalog):
    with pytest.raises(ValidationError) as err:
        pricing.create_menu_item(
            db, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 5.0), (catalog.dine_in, 6.0)])
        )
    assert err.value.details[0]["field"] == "prices"
    assert db.execute(sa.select(sa.func.count()).select_from(Price)).scalar_one() == 0


def test_update_replaces_the_whole_price_set(db, catalog):
    item = pricing.create_menu_item(
        db, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 5.0), (catalog.takeaway, 4.5)])
    )

    updated = pricing.update_menu_item(db, item.id, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 5.5)]))

    rows = price_rows(db, item.id)
    assert len(rows) == 1
    assert rows[0].table_type_id == catalog.dine_in.id
    assert rows[0].amount == 5.5
    assert [(p.table_type.name, p.amount) for p in updated.prices] == [("dine-in", 5.5)]


def test_update_with_empty_prices_clears_them(db, catalog):
    item = pricing.create_menu_item(db, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 5.0)]))
    pricing.update_menu_item(db, item.id, _payload("Fried Rice", catalog.food, []))
    assert price_rows(db, item.id) == []


def test_update_scalar_fields_and_category(db, catalog):
    item = pricing.create_menu_item(db, _payload("Iced Tea", catalog.food, [(catalog.dine_in, 2.0)]))

    updated = pricing.update_menu_item(
        db,
        item.id,
        _payload("Iced Lemon Tea", catalog.drink, [(catalog.takeaway, 2.5)], description="Cold", is_cook=True),
    )

    assert updated.name == "Iced Lemon Tea"
    assert updated.description == "Cold"
    assert updated.category.name == "drink"
    assert updated.is_cook is True


def test_update_keeping_its_own_name_is_not_a_duplicate(db, catalog):
    item = pricing.create_menu_item(db, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 5.0)]))
    updated = pricing.update_menu_item(db, item.id, _payload("Fried Rice", catalog.food, [(catalog.vip, 9.0)]))
    assert [p.table_type.name for p in updated.prices] == ["vip"]


def test_update_to_taken_name_fails_and_keeps_old_prices(db, catalog):
    pricing.create_menu_item(db, _payload("Fried Rice", catalog.food))
    item = pricing.create_menu_item(
        db, _payload("Noodles", catalog.food, [(catalog.dine_in, 6.0), (catalog.takeaway, 5.5)])
    )

    with pytest.raises(DuplicateEntry):
        pricing.update_menu_item(db, item.id, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 1.0)]))

    rows = price_rows(db, item.id)
    assert sorted(r.amount for r in rows) == [5.5, 6.0]
    assert db.get(MenuItem, item.id).name == "Noodles"


def test_update_with_unknown_table_type_keeps_old_prices(db, catalog):
    item = pricing.create_menu_item(
        db, _payload("Noodles", catalog.food, [(catalog.dine_in, 6.0), (catalog.takeaway, 5.5)])
    )
    payload = MenuItemIn(
        name="Noodles",
        category_id=catalog.food.id,
        prices=[PriceIn(table_type_id=uuid.uuid4(), amount=3.0)],
    )

    with pytest.raises(InvalidReference):
        pricing.update_menu_item(db, item.id, payload)

    assert len(price_rows(db, item.id)) == 2


def test_update_unknown_item_is_not_found(db, catalog):
    with pytest.raises(NotFound):
        pricing.update_menu_item(db, uuid.uuid4(), _payload("Nothing", catalog.food))


def test_delete_removes_item_and_prices(db, catalog):
    item = pricing.create_menu_item(
        db, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 5.0), (catalog.takeaway, 4.5)])
    )

    pricing.delete_menu_item(db, item.id)

    assert db.get(MenuItem, item.id) is None
    assert price_rows(db, item.id) == []
    with pytest.raises(NotFound):
        pricing.delete_menu_item(db, item.id)


def test_store_refuses_a_second_price_for_the_same_table_type(db, catalog):
    item = pricing.create_menu_item(db, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 5.0)]))

    db.add(Price(menu_item_id=item.id, table_type_id=catalog.dine_in.id, amount=7.0))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
    assert len(price_rows(db, item.id)) == 1


def test_get_menu_item_unknown(db):
    with pytest.raises(NotFound):
        pricing.get_menu_item(db, uuid.uuid4())


def test_list_paginates_by_name(db, catalog):
    for name in ["Dumplings", "Apple Pie", "Curry", "Bao", "Egg Tart"]:
        pricing.create_menu_item(db, _payload(name, catalog.food))

    first = pricing.list_menu_items(db, page=1, limit=2)
    last = pricing.list_menu_items(db, page=3, limit=2)

    assert [i.name for i in first.items] == ["Apple Pie", "Bao"]
    assert first.pagination() == {
        "page": 1,
        "limit": 2,
        "total": 5,
        "total_pages": 3,
        "has_next_page": True,
        "has_prev_page": False,
    }
    assert [i.name for i in last.items] == ["Egg Tart"]
    assert last.pagination()["has_next_page"] is False


def test_list_filters_by_category_and_search(db, catalog):
    pricing.create_menu_item(db, _payload("Fried Rice", catalog.food, description="Wok fried rice"))
    pricing.create_menu_item(db, _payload("Rice Milk", catalog.drink))
    pricing.create_menu_item(db, _payload("Cola", catalog.drink))

    by_category = pricing.list_menu_items(db, category_id=catalog.drink.id)
    by_search = pricing.list_menu_items(db, search="RICE")
    by_category_name = pricing.list_menu_items(db, search="beverage")
    both = pricing.list_menu_items(db, category_id=catalog.drink.id, search="rice")

    assert [i.name for i in by_category.items] == ["Cola", "Rice Milk"]
    assert [i.name for i in by_search.items] == ["Fried Rice", "Rice Milk"]
    assert [i.name for i in by_category_name.items] == ["Cola", "Rice Milk"]
    assert [i.name for i in both.items] == ["Rice Milk"]


def test_mutations_are_audited(db, catalog):
    item = pricing.create_menu_item(db, _payload("Fried Rice", catalog.food, [(catalog.dine_in, 5.0)]))
    pricing.update_menu_item(db, item.id, _payload("Fried Rice", catalog.food))
    pricing.delete_menu_item(db, item.id)

    trail = audit_trail(db, "menu_item", item.id)
    assert sorted(entry.action for entry in trail) == ["created", "deleted", "updated"]
    assert all(entry.actor_user_id is None for entry in trail)


def test_failure_after_old_prices_are_flushed_rolls_everything_back(db, catalog, monkeypatch):
    item = pricing.create_menu_item(
        db, _payload("Noodles", catalog.food, [(catalog.dine_in, 6.0), (catalog.takeaway, 5.5)])
    )

    def failing_audit(*args, **kwargs):
        raise RuntimeError("audit store unavailable")

    monkeypatch.setattr(pricing, "audit", failing_audit)

    with pytest.raises(RuntimeError):
        pricing.update_menu_item(
            db, item.id, _payload("Noodles Deluxe", catalog.drink, [(catalog.vip, 12.0)])
        )

    rows = price_rows(db, item.id)
    assert sorted((r.table_type_id, r.amount) for r in rows) == sorted(
        [(catalog.dine_in.id, 6.0), (catalog.takeaway.id, 5.5)]
    )
    stored = db.get(MenuItem, item.id)
    assert (stored.name, stored.category_id) == ("Noodles", catalog.food.id)


def test_interleaved_updates_leave_one_price_per_table_type(session_factory, db, catalog):
    item = pricing.create_menu_item(db, _payload("Noodles", catalog.food, [(catalog.dine_in, 6.0)]))
    first, second = session_factory(), session_factory()
    try:
        # Both sessions hold the item and its old price set before either writes.
        pricing.get_menu_item(first, item.id)
        pricing.get_menu_item(second, item.id)

        pricing.update_menu_item(
            first, item.id, _payload("Noodles", catalog.food, [(catalog.dine_in, 1.0), (catalog.takeaway, 2.0)])
        )
        pricing.update_menu_item(
            second, item.id, _payload("Noodles", catalog.food, [(catalog.takeaway, 3.0), (catalog.vip, 4.0)])
        )
    finally:
        first.close()
        second.close()

    rows = price_rows(db, item.id)
    table_type_ids = [r.table_type_id for r in rows]
    assert len(table_type_ids) == len(set(table_type_ids))
    assert sorted((r.table_type_id, r.amount) for r in rows) == sorted(
        [(catalog.takeaway.id, 3.0), (catalog.vip.id, 4.0)]
    )
