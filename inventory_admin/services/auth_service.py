"""
Authentication Service
Session issuance and current-profile lookup
"""

from typing import Optional

import structlog

from inventory_admin.models.user import ProfileRecord, SessionInfo
from inventory_admin.utils.database import ProfileStore
from inventory_admin.utils.exceptions import AuthErrorReason, AuthProviderError
from inventory_admin.utils.supabase_client import SupabaseIdentityProvider

logger = structlog.get_logger(__name__)


class AuthService:
    """Login and profile resolution on top of the identity provider"""

    def __init__(self, identity_provider: SupabaseIdentityProvider, profile_store: ProfileStore):
        self.identity_provider = identity_provider
        self.profile_store = profile_store

    async def login(self, email: str, password: str) -> SessionInfo:
        """Issue a session; AuthProviderError propagates to the caller"""
        return await self.identity_provider.sign_in(email.strip().lower(), password)

    async def get_current_profile(self, access_token: str) -> Optional[ProfileRecord]:
        """
        Profile of the user owning the access token

        Returns None when the profile row has not been created yet. Raises
        AuthProviderError when the provider does not accept the token.
        """
        identity = await self.identity_provider.get_user(access_token)
        if identity is None:
            raise AuthProviderError(AuthErrorReason.INVALID_CREDENTIALS, "Invalid or expired token")

        profile = await self.profile_store.find_by_auth_id(identity.id)
        if profile is None:
            logger.info("No profile for authenticated user", auth_id=identity.id)
        return profile
