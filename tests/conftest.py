"""Pytest configuration and fixtures."""

import json
import os
import time
from collections.abc import Callable, Generator
from typing import Any
from uuid import UUID, uuid4

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt
from jwt.algorithms import ECAlgorithm

# Signing key for test tokens; its public half is the configured JWK
TEST_PRIVATE_KEY = ec.generate_private_key(ec.SECP256R1())
TEST_PRIVATE_KEY_PEM = TEST_PRIVATE_KEY.private_bytes(
    encoding=serialization.Encoding.PEM,
    format=serialization.PrivateFormat.PKCS8,
    encryption_algorithm=serialization.NoEncryption(),
).decode()
_test_jwk = json.loads(ECAlgorithm.to_jwk(TEST_PRIVATE_KEY.public_key()))
_test_jwk["alg"] = "ES256"
TEST_SIGNING_KEY_JWK = json.dumps(_test_jwk)

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ["SUPABASE_SIGNING_KEY_JWK"] = TEST_SIGNING_KEY_JWK
os.environ["STORAGE_BACKEND"] = "memory"


def create_test_token(
    sub: str = "550e8400-e29b-41d4-a716-446655440000",
    email: str | None = "duo@example.com",
    role: str | None = "authenticated",
    exp_offset: int = 3600,
    **extra_claims: Any,
) -> str:
    """Create an ES256 token signed with the test key."""
    now = int(time.time())
    payload = {
        "sub": sub,
        "email": email,
        "role": role,
        "exp": now + exp_offset,
        "iat": now,
        **extra_claims,
    }
    return jwt.encode(payload, TEST_PRIVATE_KEY_PEM, algorithm="ES256")


@pytest.fixture(autouse=True)
def clear_cached_config() -> Generator[None, None, None]:
    """Reload settings and signing key for every test."""
    from src.api.middleware.auth import get_signing_key
    from src.core.config import get_settings

    get_settings.cache_clear()
    get_signing_key.cache_clear()
    yield
    get_settings.cache_clear()
    get_signing_key.cache_clear()


@pytest.fixture
def store() -> Any:
    """Provide an empty in-memory match store."""
    from src.core.store import InMemoryMatchStore

    return InMemoryMatchStore()


@pytest.fixture
def app(store: Any) -> FastAPI:
    """Provide an application wired to the test store."""
    from src.main import create_app

    return create_app(store=store)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Provide a test client for the FastAPI application.

    Args:
        app: Application fixture.

    Yields:
        TestClient: FastAPI test client.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> Callable[[UUID | str], dict[str, str]]:
    """Build Authorization headers for a given user id."""

    def _headers(user_id: UUID | str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_test_token(sub=str(user_id))}"}

    return _headers


@pytest.fixture
def profile_payload() -> Callable[..., dict[str, Any]]:
    """Build a valid duo profile request body."""

    def _payload(couple_name: str = "Sam & Alex", **overrides: Any) -> dict[str, Any]:
        return {
            "couple_name": couple_name,
            "ages": "29 & 31",
            "location": "Lisbon",
            "bio": "We love hiking, board games and long dinners.",
            "interests": ["hiking", "board games"],
            "photos": [],
            **overrides,
        }

    return _payload


@pytest.fixture
def create_duo(
    client: TestClient,
    auth_headers: Callable[[UUID | str], dict[str, str]],
    profile_payload: Callable[..., dict[str, Any]],
) -> Callable[[str], tuple[dict[str, str], dict[str, Any]]]:
    """Create a user with a duo profile through the API.

    Returns a factory giving (headers, profile) for a new user.
    """

    def _create(couple_name: str = "Sam & Alex") -> tuple[dict[str, str], dict[str, Any]]:
        headers = auth_headers(uuid4())
        response = client.post(
            "/api/v1/duo-profiles",
            json=profile_payload(couple_name),
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return headers, response.json()

    return _create
