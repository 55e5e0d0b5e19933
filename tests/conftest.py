import time

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.infra.supabase.client import get_supabase_client
from app.main import app
from app.middleware.auth import get_token_verifier
from app.services.auth import LocalTokenVerifier
from tests.fakes import FakeSupabase

TEST_SECRET = "test-jwt-secret"
ALICE_ID = "11111111-1111-1111-1111-111111111111"
BOB_ID = "22222222-2222-2222-2222-222222222222"


def make_token(
    sub: str,
    email: str = "user@example.com",
    secret: str = TEST_SECRET,
    issuer: str = "supabase",
    expires_in: int = 3600,
    **claims,
) -> str:
    now = int(time.time())
    payload = {
        "sub": sub,
        "email": email,
        "iss": issuer,
        "aud": "authenticated",
        "iat": now,
        "exp": now + expires_in,
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def verifier() -> LocalTokenVerifier:
    return LocalTokenVerifier(TEST_SECRET)


@pytest.fixture
def client(supabase, verifier, monkeypatch):
    async def _supabase_client():
        return supabase

    # Auth routes build their own client per request
    monkeypatch.setattr("app.api.dependencies.create_session_client", _supabase_client)

    app.dependency_overrides[get_supabase_client] = _supabase_client
    app.dependency_overrides[get_token_verifier] = lambda: verifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def alice_headers() -> dict:
    return auth_header(make_token(ALICE_ID, "alice@example.com"))


@pytest.fixture
def bob_headers() -> dict:
    return auth_header(make_token(BOB_ID, "bob@example.com"))
