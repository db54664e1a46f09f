"""
Shared fixtures.

Every test gets a fresh in-memory SQLite schema. The engine URL is set
before any application module is imported so the shared engine is built
against SQLite instead of PostgreSQL.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from shared.core.auth import token_for_user
from shared.core.database import Base, SessionLocal, engine, get_db
from shared.models.users import Users
from shared.utils.enums import UserRole
from inventory_service.app import models  # noqa: F401
from inventory_service.app.enum.inventory_enum import AssetStatus
from inventory_service.app.models.assets.asset_category import AssetCategory
from inventory_service.app.models.assets.assets import Asset

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_user(db):
    def _make(role=UserRole.ASSET_RESPONSIBLE, is_active=True, email=None, name=None,
              password=DEFAULT_PASSWORD):
        user = Users(
            email=email or f"user-{uuid4().hex[:8]}@example.com",
            name=name or "Test User",
            role=role.value,
            is_active=is_active,
        )
        user.set_password(password)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_category(db):
    def _make(name=None, parent=None, **defaults):
        category = AssetCategory(
            name=name or f"Category {uuid4().hex[:6]}",
            parent_id=parent.id if parent else None,
            **defaults,
        )
        db.add(category)
        db.commit()
        db.refresh(category)
        return category
    return _make


@pytest.fixture
def make_asset(db, category):
    def _make(code=None, status=AssetStatus.AVAILABLE, category_obj=None, **fields):
        asset = Asset(
            code=code or f"A-{uuid4().hex[:6].upper()}",
            name=fields.pop("name", "Laptop"),
            category_id=(category_obj or category).id,
            status=status.value,
            **fields,
        )
        db.add(asset)
        db.commit()
        db.refresh(asset)
        return asset
    return _make


# ---------------------------------------------------------------------------
# Common entities
# ---------------------------------------------------------------------------

@pytest.fixture
def admin(make_user):
    return make_user(role=UserRole.ADMIN, name="Admin", email="admin@example.com")


@pytest.fixture
def manager(make_user):
    return make_user(role=UserRole.INVENTORY_MANAGER, name="Manager", email="manager@example.com")


@pytest.fixture
def responsible(make_user):
    return make_user(role=UserRole.ASSET_RESPONSIBLE, name="Holder One", email="holder1@example.com")


@pytest.fixture
def other_responsible(make_user):
    return make_user(role=UserRole.ASSET_RESPONSIBLE, name="Holder Two", email="holder2@example.com")


@pytest.fixture
def category(make_category):
    return make_category(name="Computers")


@pytest.fixture
def asset(make_asset):
    return make_asset(code="A1")


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

def _client_for(app, db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def client(db):
    from inventory_service.app.main import app

    with _client_for(app, db) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(db):
    from auth_service.app.main import app

    with _client_for(app, db) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {token_for_user(user)}"}
    return _headers
