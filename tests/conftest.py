"""Shared test fixtures for the PinMap backend.

Provides:
- In-memory SQLite database (fresh schema per test)
- PinStore and service fixtures built on the test session
- FastAPI test client with ``get_db`` overridden
- Factory helpers for users, friendships, categories, pins and grants
"""

from __future__ import annotations

import os

# Set test environment BEFORE any app imports so Settings() picks them up.
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-pytest-only")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pinmap.core.security import create_access_token
from pinmap.database import Base, get_db
from pinmap.models import Category, Friendship, Pin, SharedCategory, SharedPin, User
from pinmap.models.social import FRIENDSHIP_ACCEPTED, FRIENDSHIP_PENDING
from pinmap.services.access_service import AccessResolver
from pinmap.services.category_service import CategoryService
from pinmap.services.friendship_service import FriendshipService
from pinmap.services.pin_service import PinService
from pinmap.services.sharing_service import SharingService
from pinmap.store import PinStore

# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return PinStore(db)


@pytest.fixture
def friendships(store):
    return FriendshipService(store)


@pytest.fixture
def sharing(store, friendships):
    return SharingService(store, friendships)


@pytest.fixture
def access(store):
    return AccessResolver(store)


@pytest.fixture
def pins(store):
    return PinService(store)


@pytest.fixture
def categories(store):
    return CategoryService(store)


# ---------------------------------------------------------------------------
# FastAPI test client
# ---------------------------------------------------------------------------


@pytest.fixture
def client(db):
    from pinmap.main import app

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------


def create_user(db, username: str, display_name: str | None = None) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        display_name=display_name or username.title(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_friendship(db, requester: User, recipient: User, status: str = FRIENDSHIP_ACCEPTED) -> Friendship:
    friendship = Friendship(user_id=requester.id, friend_id=recipient.id, status=status)
    db.add(friendship)
    db.commit()
    db.refresh(friendship)
    return friendship


def create_pending(db, requester: User, recipient: User) -> Friendship:
    return create_friendship(db, requester, recipient, status=FRIENDSHIP_PENDING)


def create_category(db, owner: User, name: str = "Food", is_public: bool = False) -> Category:
    category = Category(user_id=owner.id, name=name, is_public=is_public)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def create_pin(
    db,
    owner: User,
    title: str = "Cafe",
    category: Category | None = None,
    is_public: bool = False,
    **fields,
) -> Pin:
    pin = Pin(
        user_id=owner.id,
        title=title,
        latitude=fields.pop("latitude", 10.0),
        longitude=fields.pop("longitude", 20.0),
        category_id=category.id if category else None,
        is_public=is_public,
        **fields,
    )
    db.add(pin)
    db.commit()
    db.refresh(pin)
    return pin


def create_pin_grant(db, pin: Pin, from_user: User, to_user: User) -> SharedPin:
    grant = SharedPin(pin_id=pin.id, from_user_id=from_user.id, to_user_id=to_user.id)
    db.add(grant)
    db.commit()
    db.refresh(grant)
    return grant


def create_category_grant(db, category: Category, from_user: User, to_user: User) -> SharedCategory:
    grant = SharedCategory(category_id=category.id, from_user_id=from_user.id, to_user_id=to_user.id)
    db.add(grant)
    db.commit()
    db.refresh(grant)
    return grant


# ---------------------------------------------------------------------------
# Convenience fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def alice(db):
    return create_user(db, "alice")


@pytest.fixture
def bob(db):
    return create_user(db, "bob")


@pytest.fixture
def carol(db):
    return create_user(db, "carol")
