from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["ALLOWED_HOSTS"] = "testserver,localhost"
os.environ["ENV"] = "dev"
os.environ["IMAGEKIT_PRIVATE_KEY"] = "private_test_key"
os.environ["IMAGEKIT_PUBLIC_KEY"] = "public_test_key"

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import tablemenu.models  # noqa: F401
from tablemenu.db.base import Base
from tablemenu.db.session import get_db
from tablemenu.main import app
from tests.testkit import (
    ApiClient,
    create_category,
    create_role,
    create_table_type,
    create_user,
    login,
)


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def api(client) -> ApiClient:
    return ApiClient(client)


@pytest.fixture()
def roles(db):
    return SimpleNamespace(
        admin=create_role(db, "admin", "Administrator"),
        cashier=create_role(db, "cashier", "Cashier"),
    )


@pytest.fixture()
def admin_user(db, roles):
    return create_user(db, "boss", roles.admin)


@pytest.fixture()
def admin_token(api, admin_user) -> str:
    return login(api, admin_user.username)


@pytest.fixture()
def cashier_token(api, db, roles) -> str:
    create_user(db, "till", roles.cashier)
    return login(api, "till")


@pytest.fixture()
def catalog(db):
    return SimpleNamespace(
        food=create_category(db, "food", "Main Course"),
        drink=create_category(db, "drink", "Beverage"),
        dine_in=create_table_type(db, "dine-in", order=1),
        takeaway=create_table_type(db, "takeaway", order=2),
        vip=create_table_type(db, "vip", order=3),
    )
