import os

# Settings are read at import time
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("CASE_STORE", "supabase")

import uuid
import pytest
from datetime import datetime
from typing import AsyncGenerator, Callable
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from asgi_lifespan import LifespanManager

from app.api.deps import get_case_repository
from app.core.auth import get_current_user
from app.core.supabase import get_supabase_client
from app.crud.case import CaseRepository
from app.schemas.case import Case
from app.schemas.user import User
from main import app
from supabase_fakes import FakeSupabase

TEST_USER_ID = uuid.UUID("11111111-1111-4111-8111-111111111111")
OTHER_USER_ID = uuid.UUID("22222222-2222-4222-8222-222222222222")


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Return an empty in-memory Supabase."""
    return FakeSupabase()


@pytest.fixture
def test_user() -> User:
    """Return the authenticated test user."""
    return User(id=TEST_USER_ID, email="lawyer@example.com")


@pytest.fixture
async def test_app(fake_supabase, test_user) -> AsyncGenerator[FastAPI, None]:
    """Create a test instance of the FastAPI application backed by the fake."""
    app.dependency_overrides[get_supabase_client] = lambda: fake_supabase
    app.dependency_overrides[get_case_repository] = lambda: CaseRepository(fake_supabase)
    app.dependency_overrides[get_current_user] = lambda: test_user
    async with LifespanManager(app):
        yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client for the application."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def make_case() -> Callable[..., Case]:
    """Build a Case without touching any store."""
    def _make_case(
        previous_date="2024-01-01T10:00:00",
        next_date="2024-01-10T10:00:00",
        status="pending",
        case_details="Smith v. Jones",
        **extra,
    ) -> Case:
        return Case(
            id=extra.pop("id", uuid.uuid4()),
            previous_date=previous_date,
            next_date=next_date,
            status=status,
            case_details=case_details,
            user_id=extra.pop("user_id", TEST_USER_ID),
            created_at=extra.pop("created_at", datetime(2024, 1, 1, 9, 30, 0)),
            updated_at=extra.pop("updated_at", datetime(2024, 1, 2, 14, 5, 9)),
            **extra,
        )
    return _make_case


@pytest.fixture
def seed_case(fake_supabase) -> Callable[..., dict]:
    """Insert a raw case row into the fake `cases` table."""
    def _seed_case(user_id=TEST_USER_ID, **fields) -> dict:
        row = {
            "id": str(uuid.uuid4()),
            "previous_date": "2024-01-01T10:00:00+00:00",
            "next_date": "2024-01-10T10:00:00+00:00",
            "status": "pending",
            "case_details": "Smith v. Jones",
            "user_id": str(user_id),
            "team_id": None,
            "created_at": "2024-01-01T09:30:00+00:00",
            "updated_at": "2024-01-01T09:30:00+00:00",
        }
        row.update(fields)
        fake_supabase.tables.setdefault("cases", []).append(row)
        return row
    return _seed_case
