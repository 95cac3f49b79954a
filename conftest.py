"""Shared pytest fixtures."""

import os

# Keep tests off the on-disk database before any app module reads settings
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

import pytest

from app.core.storage import InMemoryStorage, LocalStore
from app.crud import crud_tag, crud_user
from app.schemas.user import UserCreate
from app.services.seed import seed_sample_data


@pytest.fixture
def store():
    """A fresh, empty store per test."""
    return LocalStore(InMemoryStorage())


@pytest.fixture
def seeded_store(store):
    seed_sample_data(store, demo_password="password")
    return store


@pytest.fixture
def tags(store):
    return {
        name: crud_tag.create_tag(store, name=name)
        for name in ("javascript", "react", "python")
    }


@pytest.fixture
def make_user(store):
    def _make_user(username="test_user", email=None, password="testpassword123", **extra):
        return crud_user.create_user(
            store,
            user_in=UserCreate(
                username=username,
                email=email or f"{username}@example.com",
                password=password,
                **extra,
            ),
        )
    return _make_user


@pytest.fixture
def author(make_user):
    return make_user("sarah_dev", bio="Full-stack developer")
