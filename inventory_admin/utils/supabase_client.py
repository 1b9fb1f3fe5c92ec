"""
Supabase Client Wrapper
Identity provider adapter: sign-up, sign-in, and session lookup
"""

from typing import Optional, Dict, Any

import httpx
import structlog
from supabase import create_client, Client, AuthApiError, AuthError, AuthRetryableError

from inventory_admin.config import SupabaseConfig
from inventory_admin.models.user import IdentityRecord, SessionInfo, SignUpResult
from inventory_admin.utils.exceptions import AuthErrorReason, AuthProviderError

logger = structlog.get_logger(__name__)

DUPLICATE_EMAIL_CODES = {"user_already_exists", "email_exists"}
WEAK_PASSWORD_CODES = {"weak_password"}
INVALID_CREDENTIALS_CODES = {"invalid_credentials", "email_not_confirmed"}


def classify_auth_error(exc: Exception) -> AuthProviderError:
    """Map a Supabase or transport exception onto the closed error taxonomy"""
    if isinstance(exc, AuthProviderError):
        return exc

    if isinstance(exc, (httpx.HTTPError, AuthRetryableError)):
        return AuthProviderError(
            AuthErrorReason.PROVIDER_UNAVAILABLE,
            "Authentication service is unavailable"
        )

    if isinstance(exc, AuthApiError):
        code = getattr(exc, "code", None)
        message = getattr(exc, "message", None) or str(exc)
        lowered = message.lower()
        status = getattr(exc, "status", 0) or 0

        if code in DUPLICATE_EMAIL_CODES or "already registered" in lowered:
            return AuthProviderError(AuthErrorReason.DUPLICATE_EMAIL, message)
        if code in WEAK_PASSWORD_CODES or "password should" in lowered:
            return AuthProviderError(AuthErrorReason.WEAK_PASSWORD, message)
        if code in INVALID_CREDENTIALS_CODES or "invalid login credentials" in lowered:
            return AuthProviderError(AuthErrorReason.INVALID_CREDENTIALS, message)
        if status >= 500:
            return AuthProviderError(AuthErrorReason.PROVIDER_UNAVAILABLE, message)
        return AuthProviderError(AuthErrorReason.INVALID_REQUEST, message)

    # AuthUnknownError and friends: the provider answered with something unusable
    if isinstance(exc, AuthError):
        return AuthProviderError(AuthErrorReason.PROVIDER_UNAVAILABLE, str(exc))

    return AuthProviderError(AuthErrorReason.PROVIDER_UNAVAILABLE, str(exc) or None)


class SupabaseIdentityProvider:
    """Supabase Auth wrapper, built once at startup and shared for the process lifetime"""

    def __init__(self, config: SupabaseConfig, client: Optional[Client] = None):
        self.url = config.supabase_url
        self.client: Client = client or create_client(config.supabase_url, config.supabase_anon_key)
        logger.info("Supabase client initialized", url=self.url)

    async def sign_up(self, email: str, password: str, attributes: Dict[str, Any]) -> SignUpResult:
        """
        Sign up a new user with Supabase Auth

        Args:
            email: User email
            password: User password, strength is enforced by the provider
            attributes: first_name, last_name and role, stored as user metadata

        Returns:
            SignUpResult: provider user ID and whether email verification is pending

        Raises:
            AuthProviderError: duplicate email, weak password, or provider unavailable
        """
        try:
            response = self.client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {
                    "data": attributes or {}
                }
            })
        except Exception as e:
            error = classify_auth_error(e)
            logger.warning("Supabase sign up failed", email=email, reason=error.reason.value, error=error.message)
            raise error from e

        user = response.user
        if user is None:
            logger.error("Supabase sign up returned no user", email=email)
            raise AuthProviderError(AuthErrorReason.PROVIDER_UNAVAILABLE, "Registration failed")

        # With email confirmation on, a repeated sign-up returns an obfuscated
        # user that carries no identities instead of an error
        if user.identities is not None and len(user.identities) == 0:
            logger.warning("Supabase sign up for existing email", email=email)
            raise AuthProviderError(AuthErrorReason.DUPLICATE_EMAIL, "User already registered")

        pending = user.email_confirmed_at is None
        logger.info("User signed up", email=email, user_id=user.id, pending_verification=pending)
        return SignUpResult(
            user_id=str(user.id),
            email=user.email or email,
            pending_verification=pending
        )

    async def sign_in(self, email: str, password: str) -> SessionInfo:
        """
        Sign in with email and password

        Returns:
            SessionInfo: access and refresh tokens

        Raises:
            AuthProviderError: invalid credentials or provider unavailable
        """
        try:
            response = self.client.auth.sign_in_with_password({
                "email": email,
                "password": password
            })
        except Exception as e:
            error = classify_auth_error(e)
            logger.warning("Supabase sign in failed", email=email, reason=error.reason.value)
            raise error from e

        if not response.user or not response.session:
            raise AuthProviderError(AuthErrorReason.INVALID_CREDENTIALS, "Invalid credentials")

        logger.info("User signed in", email=email, user_id=response.user.id)
        return self._session_info(response.session)

    async def get_current_session(self) -> Optional[SessionInfo]:
        """Session cached on the client handle, refreshed by the client if expired"""
        try:
            session = self.client.auth.get_session()
        except Exception as e:
            raise classify_auth_error(e) from e

        if session is None:
            return None
        return self._session_info(session)

    async def get_user(self, access_token: str) -> Optional[IdentityRecord]:
        """
        Resolve an access token to the provider's user record

        Returns None for tokens the provider rejects.
        """
        try:
            response = self.client.auth.get_user(access_token)
        except AuthApiError as e:
            if (getattr(e, "status", 0) or 0) in (401, 403):
                logger.info("Access token rejected by provider")
                return None
            raise classify_auth_error(e) from e
        except Exception as e:
            raise classify_auth_error(e) from e

        if response is None or response.user is None:
            return None

        user = response.user
        return IdentityRecord(
            id=str(user.id),
            email=user.email or "",
            metadata=user.user_metadata or {},
            email_confirmed=user.email_confirmed_at is not None
        )

    @staticmethod
    def _session_info(session) -> SessionInfo:
        return SessionInfo(
            user_id=str(session.user.id),
            email=session.user.email or "",
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at
        )
