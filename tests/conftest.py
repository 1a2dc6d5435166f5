"""Shared fixtures: an in-memory datastore wired into the app's client dependencies."""

import os

# Never reach a real project from tests
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("PAYMENT_ENCRYPTION_KEY", "test-payment-key")
# The whole suite shares one client address
os.environ.setdefault("RATE_LIMIT", "10000/minute")

import pytest
from httpx import ASGITransport, AsyncClient

from app.database.supabase_client import get_admin_supabase, get_session_supabase, get_supabase
from app.main import app
from tests.support import (
    ADMIN_ID, BRAND_ID, CONSUMER_ID, DEACTIVATED_ID, OTHER_BRAND_ID, OTHER_CONSUMER_ID,
    OTHER_RESELLER_ID, PRODUCT_ID, RESELLER_ID, VIEWER_ID, FakeSupabase,
)


@pytest.fixture
def db():
    """Datastore seeded with one account per role and a small ownership graph.

    RESELLER referred CONSUMER and owns BRAND; OTHER_RESELLER referred
    OTHER_CONSUMER and owns OTHER_BRAND.
    """
    fake = FakeSupabase()
    fake.add_profile(ADMIN_ID, ["admin"], email="admin@example.com", full_name="Ada Admin")
    fake.add_profile(RESELLER_ID, ["reseller"], email="rita@example.com", full_name="Rita Reseller",
                     referred_by=ADMIN_ID)
    fake.add_profile(OTHER_RESELLER_ID, ["reseller"], email="oscar@example.com", full_name="Oscar Reseller")
    fake.add_profile(CONSUMER_ID, ["consumer"], email="carl@example.com", full_name="Carl Consumer",
                     referred_by=RESELLER_ID)
    fake.add_profile(OTHER_CONSUMER_ID, ["consumer"], email="cora@example.com", full_name="Cora Consumer",
                     referred_by=OTHER_RESELLER_ID)
    # Legacy scalar role value
    fake.add_profile(VIEWER_ID, "viewer", email="vic@example.com", full_name="Vic Viewer")
    fake.add_profile(DEACTIVATED_ID, ["reseller"], email="dee@example.com", full_name="Dee Deactivated",
                     account_status="deactive")
    fake.tables["brands"] = [
        {"id": BRAND_ID, "name": "Rita's Brand", "owner_user_id": RESELLER_ID, "timezone": "UTC",
         "created_at": "2024-01-02T00:00:00+00:00"},
        {"id": OTHER_BRAND_ID, "name": "Oscar's Brand", "owner_user_id": OTHER_RESELLER_ID, "timezone": "UTC",
         "created_at": "2024-01-01T00:00:00+00:00"},
    ]
    fake.tables["products"] = [
        {"id": PRODUCT_ID, "name": "Voice Agent", "description": "Inbound call handling",
         "created_at": "2024-01-01T00:00:00+00:00"},
    ]
    return fake


@pytest.fixture
async def client(db):
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_admin_supabase] = lambda: db
    app.dependency_overrides[get_session_supabase] = lambda: db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
