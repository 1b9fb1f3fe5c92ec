"""
Pytest fixtures for admin console tests
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from inventory_admin.config import AppConfig, DatabaseConfig
from inventory_admin.models.user import ProfileRecord, SignUpResult, UserRole
from inventory_admin.utils.database import ProfileStore
from inventory_admin.utils.exceptions import AuthErrorReason, AuthProviderError

# Configure pytest-asyncio mode for version 1.x
pytest_plugins = ('pytest_asyncio',)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )


class FakeIdentityProvider:
    """In-memory identity provider that remembers registered emails"""

    def __init__(self):
        self.users: Dict[str, str] = {}
        self.sign_up_calls = 0

    async def sign_up(self, email, password, attributes):
        self.sign_up_calls += 1
        if email in self.users:
            raise AuthProviderError(AuthErrorReason.DUPLICATE_EMAIL, "User already registered")
        user_id = str(uuid.uuid4())
        self.users[email] = user_id
        return SignUpResult(user_id=user_id, email=email, pending_verification=True)


@pytest.fixture
def fake_identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def mock_identity_provider():
    """Identity provider with awaitable methods"""
    provider = MagicMock()
    provider.sign_up = AsyncMock(return_value=SignUpResult(
        user_id="5f0c2d9e-1111-4a2b-9c3d-000000000001",
        email="a@x.com",
        pending_verification=True
    ))
    provider.sign_in = AsyncMock()
    provider.get_user = AsyncMock(return_value=None)
    provider.get_current_session = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def mock_profile_store():
    """Profile store with awaitable methods"""
    store = MagicMock()
    store.find_by_auth_id = AsyncMock(return_value=None)
    store.list_all = AsyncMock(return_value=[])
    store.wait_for_profile = AsyncMock(return_value=None)
    store.ping = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_db_pool():
    """Mock asyncpg database pool"""
    pool = MagicMock()
    conn = AsyncMock()

    # Configure connection context manager
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)

    return pool, conn


@pytest.fixture
def db_config() -> DatabaseConfig:
    return DatabaseConfig(
        db_host="localhost",
        db_port=5432,
        db_name="test_inventory",
        db_user="test_user",
        db_password="test_password"
    )


@pytest.fixture
def profile_store(db_config, mock_db_pool) -> ProfileStore:
    """ProfileStore wired to the mocked pool"""
    pool, _ = mock_db_pool
    store = ProfileStore(db_config)
    store.pool = pool
    return store


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(profile_wait_timeout=0)


@pytest.fixture
def sample_profile_rows() -> List[Dict[str, Any]]:
    """Rows as returned by the users table, newest first"""
    now = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)
    roles = [UserRole.ADMIN, UserRole.MANAGER, UserRole.STAFF]
    return [
        {
            "id": 3 - i,
            "auth_id": uuid.UUID(f"00000000-0000-4000-8000-00000000000{3 - i}"),
            "email": f"user{3 - i}@example.com",
            "first_name": f"First{3 - i}",
            "last_name": f"Last{3 - i}",
            "role": roles[i].value,
            "created_at": now - timedelta(days=i),
        }
        for i in range(3)
    ]


@pytest.fixture
def sample_profiles(sample_profile_rows) -> List[ProfileRecord]:
    return [
        ProfileRecord(**{**row, "auth_id": str(row["auth_id"])})
        for row in sample_profile_rows
    ]


@pytest.fixture
def client(mock_identity_provider, mock_profile_store, app_config):
    """Test client with startup components replaced by mocks"""
    from inventory_admin.main import app
    from inventory_admin.utils.dependencies import get_config, get_identity_provider, get_profile_store

    app.dependency_overrides[get_identity_provider] = lambda: mock_identity_provider
    app.dependency_overrides[get_profile_store] = lambda: mock_profile_store
    app.dependency_overrides[get_config] = lambda: app_config
    yield TestClient(app)
    app.dependency_overrides.clear()
