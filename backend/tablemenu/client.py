"""Small HTTP client for scripted admin work against a running API.

``AdminSession`` owns the bearer token explicitly: ``login()`` stores it,
``logout()`` drops it, and every call made in between carries it.
"""
from __future__ import annotations

from dataclasses import dataclass, field

import requests


class ApiError(RuntimeError):
    def __init__(self, status_code: int, payload):
        self.status_code = status_code
        self.payload = payload
        self.code = payload.get("code") if isinstance(payload, dict) else None
        super().__init__(f"HTTP {status_code}: {payload}")


@dataclass
class AdminSession:
    base_url: str = ""
    http: object = field(default_factory=requests.Session)
    token: str | None = None
    user: dict | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def call(self, method: str, path: str, *, body=None, params=None, auth: bool = True):
        headers = {"Accept": "application/json"}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        resp = self.http.request(
            method.upper(),
            f"{self.base_url.rstrip('/')}{path}",
            json=body,
            params=params,
            headers=headers,
        )
        payload = resp.json() if resp.content else None
        if resp.status_code >= 400 or not isinstance(payload, dict) or not payload.get("ok"):
            raise ApiError(resp.status_code, payload)
        return payload.get("data")

    def login(self, username: str, password: str) -> dict:
        data = self.call("POST", "/auth/login", body={"username": username, "password": password}, auth=False)
        self.token = data["token"]
        self.user = data["user"]
        return self.user

    def logout(self) -> None:
        self.token = None
        self.user = None

    def menu(self, category: str | None = None, table_type: str | None = None) -> list[dict]:
        params = {}
        if category:
            params["category"] = category
        if table_type:
            params["tableType"] = table_type
        return self.call("GET", "/menu", params=params or None, auth=False)

    def create_menu_item(self, payload: dict) -> dict:
        return self.call("POST", "/admin/menu-items", body=payload)

    def update_menu_item(self, item_id: str, payload: dict) -> dict:
        return self.call("PUT", f"/admin/menu-items/{item_id}", body=payload)

    def delete_menu_item(self, item_id: str) -> None:
        self.call("DELETE", f"/admin/menu-items/{item_id}")
