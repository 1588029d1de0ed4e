from __future__ import annotations

import json

import sqlalchemy as sa
from sqlalchemy.orm import Session

from tablemenu.core.security import hash_password
from tablemenu.models import Category, Price, Role, TableType, User

DEFAULT_PASSWORD = "secret123"


class ApiError(RuntimeError):
    def __init__(self, status_code: int, payload):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"HTTP {status_code}: {payload}")

    @property
    def code(self):
        return self.payload.get("code") if isinstance(self.payload, dict) else None


class ApiClient:
    """Thin wrapper over TestClient returning the ``data`` of the envelope."""

    def __init__(self, client):
        self.client = client

    def raw(self, method: str, path: str, *, token: str | None = None, body=None, params=None, files=None, data=None):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return self.client.request(
            method.upper(),
            path,
            json=body,
            params=params,
            files=files,
            data=data,
            headers=headers,
        )

    def call(self, method: str, path: str, **kwargs):
        resp = self.raw(method, path, **kwargs)
        payload = _parse_payload(resp.text)
        if resp.status_code >= 400:
            raise ApiError(resp.status_code, payload)
        assert payload["ok"] is True
        return payload["data"]


def _parse_payload(raw: str):
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def create_role(db: Session, name: str, display_name: str | None = None) -> Role:
    role = Role(name=name, display_name=display_name or name.title())
    db.add(role)
    db.commit()
    return role


def create_user(
    db: Session,
    username: str,
    role: Role,
    *,
    password: str = DEFAULT_PASSWORD,
    is_active: bool = True,
) -> User:
    user = User(
        username=username,
        password_hash=hash_password(password),
        role_id=role.id,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    return user


def create_category(db: Session, name: str, display_name: str | None = None) -> Category:
    category = Category(name=name, display_name=display_name or name.title())
    db.add(category)
    db.commit()
    return category


def create_table_type(db: Session, name: str, order: int = 0) -> TableType:
    table_type = TableType(name=name, display_name=name.replace("-", " ").title(), order=order)
    db.add(table_type)
    db.commit()
    return table_type


def login(api: ApiClient, username: str, password: str = DEFAULT_PASSWORD) -> str:
    data = api.call("POST", "/auth/login", body={"username": username, "password": password})
    token = data.get("token")
    if not token:
        raise AssertionError("No token received.")
    return token


def price_rows(db: Session, menu_item_id) -> list[Price]:
    db.expire_all()
    return list(db.execute(sa.select(Price).where(Price.menu_item_id == menu_item_id)).scalars())


def menu_item_body(name: str, category_id, prices: dict | None = None, **extra) -> dict:
    body = {
        "name": name,
        "description": extra.pop("description", f"{name} of the house"),
        "image": extra.pop("image", f"https://ik.imagekit.io/demo/{name.lower().replace(' ', '_')}.jpg"),
        "category_id": str(category_id),
        "prices": [
            {"table_type_id": str(table_type_id), "amount": amount}
            for table_type_id, amount in (prices or {}).items()
        ],
    }
    body.update(extra)
    return body
