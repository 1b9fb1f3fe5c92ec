"""
Database utilities for the admin console
Read access to the trigger-populated public.users table
"""

import asyncio
import ssl
from typing import Optional, List

import asyncpg
import structlog
from asyncpg import Pool
from pydantic import ValidationError

from inventory_admin.config import DatabaseConfig
from inventory_admin.models.user import ProfileRecord
from inventory_admin.utils.exceptions import StoreError

logger = structlog.get_logger(__name__)

PROFILE_COLUMNS = "id, auth_id, email, first_name, last_name, role, created_at"


class ProfileStore:
    """Connection pool and queries for user profiles"""

    def __init__(self, config: DatabaseConfig):
        self.pool: Optional[Pool] = None
        self.db_config = {
            'host': config.db_host,
            'port': config.db_port,
            'database': config.db_name,
            'user': config.db_user,
            'password': config.db_password,
            'min_size': config.db_pool_min_size,
            'max_size': config.db_pool_max_size,
            'command_timeout': config.db_command_timeout
        }
        if config.db_ssl:
            # Supabase pooler certificates are not verified
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            self.db_config['ssl'] = context

    async def initialize(self):
        """Initialize database connection pool"""
        try:
            self.pool = await asyncpg.create_pool(**self.db_config)
            logger.info("Database pool created", database=self.db_config['database'])

            # Test connection
            async with self.pool.acquire() as conn:
                await conn.execute('SELECT 1')
                logger.info("Connected to Supabase PostgreSQL database")

        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            logger.error("Failed to initialize database", error=str(e))
            raise StoreError(f"Database connection failed: {e}") from e

    async def close(self):
        """Close database connection pool"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    def _require_pool(self) -> Pool:
        if not self.pool:
            raise StoreError("Database pool not initialized")
        return self.pool

    async def ping(self) -> bool:
        """Run a trivial query against the pool"""
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                await conn.fetchval('SELECT 1')
            return True
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            raise StoreError(f"Database connection failed: {e}") from e

    # ===== PROFILE OPERATIONS =====

    async def find_by_auth_id(self, auth_id: str) -> Optional[ProfileRecord]:
        """Profile for an identity provider user, None when the row does not exist (yet)"""
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {PROFILE_COLUMNS} FROM users WHERE auth_id = $1",
                    auth_id
                )
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            logger.error("Failed to fetch profile", auth_id=auth_id, error=str(e))
            raise StoreError(f"Failed to fetch user profile: {e}") from e

        if not row:
            return None
        return self._row_to_profile(row)

    async def list_all(self) -> List[ProfileRecord]:
        """All profiles, newest first"""
        # TODO: add LIMIT/OFFSET paging once the console lists more than a few hundred users
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch(
                    f"SELECT {PROFILE_COLUMNS} FROM users ORDER BY created_at DESC"
                )
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            logger.error("Failed to list profiles", error=str(e))
            raise StoreError(f"Failed to fetch users: {e}") from e

        return [self._row_to_profile(row) for row in rows]

    async def wait_for_profile(
        self,
        auth_id: str,
        timeout: float,
        interval: float = 0.5
    ) -> Optional[ProfileRecord]:
        """
        Poll until the sign-up trigger has created the profile row

        Returns the profile, or None if it did not appear within the timeout.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout

        while True:
            remaining = deadline - loop.time()
            try:
                profile = await asyncio.wait_for(self.find_by_auth_id(auth_id), max(remaining, 0))
            except asyncio.TimeoutError:
                profile = None
            if profile is not None:
                return profile

            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.info("Profile not visible yet", auth_id=auth_id, timeout=timeout)
                return None
            await asyncio.sleep(min(interval, remaining))

    @staticmethod
    def _row_to_profile(row) -> ProfileRecord:
        data = dict(row)
        # auth_id is a uuid column
        data['auth_id'] = str(data['auth_id'])
        try:
            return ProfileRecord(**data)
        except ValidationError as e:
            logger.error("Malformed profile row", auth_id=data['auth_id'], error=str(e))
            raise StoreError(f"Malformed user profile {data['auth_id']}") from e
