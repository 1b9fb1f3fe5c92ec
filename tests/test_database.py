"""
Profile store tests
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

import asyncpg

from inventory_admin.models.user import ProfileRecord, UserRole
from inventory_admin.utils.database import ProfileStore
from inventory_admin.utils.exceptions import StoreError


class TestProfileStore:

    @pytest.mark.asyncio
    async def test_find_by_auth_id_missing_row(self, profile_store, mock_db_pool):
        _, conn = mock_db_pool
        conn.fetchrow.return_value = None

        assert await profile_store.find_by_auth_id("missing") is None

    @pytest.mark.asyncio
    async def test_find_by_auth_id(self, profile_store, mock_db_pool, sample_profile_rows):
        _, conn = mock_db_pool
        conn.fetchrow.return_value = sample_profile_rows[0]

        profile = await profile_store.find_by_auth_id("00000000-0000-4000-8000-000000000003")

        assert isinstance(profile, ProfileRecord)
        assert profile.auth_id == "00000000-0000-4000-8000-000000000003"
        assert profile.role == UserRole.ADMIN
        query, auth_id = conn.fetchrow.await_args.args
        assert "WHERE auth_id = $1" in query
        assert auth_id == "00000000-0000-4000-8000-000000000003"

    @pytest.mark.asyncio
    async def test_list_all_newest_first(self, profile_store, mock_db_pool, sample_profile_rows):
        _, conn = mock_db_pool
        conn.fetch.return_value = sample_profile_rows

        profiles = await profile_store.list_all()

        assert "ORDER BY created_at DESC" in conn.fetch.await_args.args[0]
        assert [p.id for p in profiles] == [3, 2, 1]
        created = [p.created_at for p in profiles]
        assert all(a >= b for a, b in zip(created, created[1:]))

    @pytest.mark.asyncio
    async def test_list_all_empty(self, profile_store, mock_db_pool):
        _, conn = mock_db_pool
        conn.fetch.return_value = []

        assert await profile_store.list_all() == []

    @pytest.mark.asyncio
    async def test_query_failure_raises_store_error(self, profile_store, mock_db_pool):
        _, conn = mock_db_pool
        conn.fetch.side_effect = asyncpg.PostgresError("relation \"users\" does not exist")

        with pytest.raises(StoreError):
            await profile_store.list_all()

    @pytest.mark.asyncio
    async def test_connection_loss_raises_store_error(self, profile_store, mock_db_pool):
        _, conn = mock_db_pool
        conn.fetchrow.side_effect = ConnectionResetError("connection reset")

        with pytest.raises(StoreError):
            await profile_store.find_by_auth_id("abc")

    @pytest.mark.asyncio
    async def test_uninitialized_pool(self, db_config):
        store = ProfileStore(db_config)

        with pytest.raises(StoreError, match="not initialized"):
            await store.list_all()

    @pytest.mark.asyncio
    async def test_wait_for_profile_appears(self, profile_store, mock_db_pool, sample_profile_rows):
        _, conn = mock_db_pool
        conn.fetchrow.side_effect = [None, None, sample_profile_rows[1]]

        profile = await profile_store.wait_for_profile("auth-id", timeout=5, interval=0.01)

        assert profile.id == 2
        assert conn.fetchrow.await_count == 3

    @pytest.mark.asyncio
    async def test_wait_for_profile_times_out(self, profile_store, mock_db_pool):
        _, conn = mock_db_pool
        conn.fetchrow.return_value = None

        assert await profile_store.wait_for_profile("auth-id", timeout=0.05, interval=0.01) is None

    @pytest.mark.asyncio
    async def test_wait_for_profile_bounds_slow_query(self, profile_store, mock_db_pool):
        _, conn = mock_db_pool

        async def slow_fetchrow(*args):
            await asyncio.sleep(1.0)

        conn.fetchrow.side_effect = slow_fetchrow
        loop = asyncio.get_running_loop()
        started = loop.time()

        assert await profile_store.wait_for_profile("auth-id", timeout=0.1, interval=0.01) is None
        assert loop.time() - started < 0.5

    @pytest.mark.asyncio
    async def test_malformed_row_raises_store_error(self, profile_store, mock_db_pool, sample_profile_rows):
        _, conn = mock_db_pool
        conn.fetch.return_value = [{**sample_profile_rows[0], "first_name": None}]

        with pytest.raises(StoreError, match="Malformed"):
            await profile_store.list_all()

    @pytest.mark.asyncio
    async def test_unknown_role_raises_store_error(self, profile_store, mock_db_pool, sample_profile_rows):
        _, conn = mock_db_pool
        conn.fetchrow.return_value = {**sample_profile_rows[0], "role": "user"}

        with pytest.raises(StoreError):
            await profile_store.find_by_auth_id("00000000-0000-4000-8000-000000000003")

    @pytest.mark.asyncio
    async def test_ping(self, profile_store, mock_db_pool):
        _, conn = mock_db_pool
        conn.fetchval = AsyncMock(return_value=1)

        assert await profile_store.ping() is True

    def test_ssl_context_when_enabled(self, db_config):
        config = db_config.model_copy(update={"db_ssl": True})

        store = ProfileStore(config)

        assert "ssl" in store.db_config
        assert "ssl" not in ProfileStore(db_config).db_config

    def test_connection_settings_from_config(self, db_config):
        store = ProfileStore(db_config)

        assert store.db_config['host'] == "localhost"
        assert store.db_config['database'] == "test_inventory"
        assert store.db_config['user'] == "test_user"
