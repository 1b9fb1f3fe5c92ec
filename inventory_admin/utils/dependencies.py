"""
FastAPI Dependencies
Startup-constructed components and per-request services
"""

from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from inventory_admin.config import AppConfig, get_app_config
from inventory_admin.services.auth_service import AuthService
from inventory_admin.services.registration_service import RegistrationService
from inventory_admin.utils.database import ProfileStore
from inventory_admin.utils.supabase_client import SupabaseIdentityProvider


def get_identity_provider(request: Request) -> SupabaseIdentityProvider:
    """Identity provider adapter created during application startup"""
    provider = getattr(request.app.state, "identity_provider", None)
    if provider is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service not initialized"
        )
    return provider


def get_profile_store(request: Request) -> ProfileStore:
    """Profile store created during application startup"""
    store = getattr(request.app.state, "profile_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not initialized"
        )
    return store


def get_config() -> AppConfig:
    return get_app_config()


IdentityProviderDep = Annotated[SupabaseIdentityProvider, Depends(get_identity_provider)]
ProfileStoreDep = Annotated[ProfileStore, Depends(get_profile_store)]
AppConfigDep = Annotated[AppConfig, Depends(get_config)]


def get_registration_service(
    identity_provider: IdentityProviderDep,
    profile_store: ProfileStoreDep,
    app_config: AppConfigDep
) -> RegistrationService:
    return RegistrationService(identity_provider, profile_store, app_config)


def get_auth_service(
    identity_provider: IdentityProviderDep,
    profile_store: ProfileStoreDep
) -> AuthService:
    return AuthService(identity_provider, profile_store)


async def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Access token from the Authorization header"""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return authorization.split(" ", 1)[1].strip()


# Type aliases for cleaner dependency injection
RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BearerToken = Annotated[str, Depends(get_bearer_token)]
