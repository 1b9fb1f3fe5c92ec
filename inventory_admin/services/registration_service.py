"""
Registration Service
Validates registration input, signs the user up with the identity provider,
and optionally waits for the trigger-created profile
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

import structlog

from inventory_admin.config import AppConfig
from inventory_admin.models.user import ProfileRecord, RegistrationRequest, UserRole
from inventory_admin.utils.database import ProfileStore
from inventory_admin.utils.exceptions import AuthProviderError, StoreError
from inventory_admin.utils.supabase_client import SupabaseIdentityProvider
from inventory_admin.utils.validators import validate_registration

logger = structlog.get_logger(__name__)

VALIDATION_REASON = "validation"

SUCCESS_MESSAGE = "User registered successfully! Please check your email to verify your account."


@dataclass(frozen=True)
class RegistrationSuccess:
    user_id: str
    email: str
    pending_verification: bool
    profile: Optional[ProfileRecord] = None
    message: str = SUCCESS_MESSAGE


@dataclass(frozen=True)
class RegistrationRejected:
    reason: str
    message: str
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RegistrationUnavailable:
    message: str


RegistrationOutcome = Union[RegistrationSuccess, RegistrationRejected, RegistrationUnavailable]


class RegistrationService:
    """Registration workflow"""

    def __init__(
        self,
        identity_provider: SupabaseIdentityProvider,
        profile_store: ProfileStore,
        app_config: AppConfig
    ):
        self.identity_provider = identity_provider
        self.profile_store = profile_store
        self.app_config = app_config

    async def register(self, request: RegistrationRequest) -> RegistrationOutcome:
        """
        Register a new user

        Invalid input is rejected without contacting the identity provider.
        Unless a profile wait is configured, success is reported as soon as the
        provider accepts the sign-up; the profile row may not be visible yet.
        """
        errors = validate_registration(request, self.app_config.registrable_roles)
        if errors:
            logger.info("Registration rejected by validation", email=request.email, errors=errors)
            return RegistrationRejected(
                reason=VALIDATION_REASON,
                message=errors[0],
                errors=errors
            )

        email = request.email.strip().lower()
        attributes = {
            "first_name": request.first_name.strip(),
            "last_name": request.last_name.strip(),
            "role": UserRole(request.role).value,
        }

        try:
            result = await self.identity_provider.sign_up(email, request.password, attributes)
        except AuthProviderError as e:
            if e.is_transport_failure:
                logger.error("Registration failed, provider unavailable", email=email, error=e.message)
                return RegistrationUnavailable(message=e.message)
            return RegistrationRejected(reason=e.reason.value, message=e.message)

        profile = None
        if self.app_config.profile_wait_timeout > 0:
            profile = await self._wait_for_profile(result.user_id)

        logger.info(
            "User registered",
            email=email,
            user_id=result.user_id,
            pending_verification=result.pending_verification,
            profile_visible=profile is not None
        )
        return RegistrationSuccess(
            user_id=result.user_id,
            email=result.email,
            pending_verification=result.pending_verification,
            profile=profile
        )

    async def _wait_for_profile(self, user_id: str) -> Optional[ProfileRecord]:
        try:
            return await self.profile_store.wait_for_profile(
                user_id,
                timeout=self.app_config.profile_wait_timeout,
                interval=self.app_config.profile_poll_interval
            )
        except StoreError as e:
            # The sign-up itself succeeded; the profile is only late
            logger.warning("Could not confirm profile creation", user_id=user_id, error=e.message)
            return None
