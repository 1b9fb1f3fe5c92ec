"""
Authentication Routes
User registration, login, and current-profile lookup
"""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse
import structlog

from inventory_admin.models.user import LoginRequest, ProfileResponse, RegistrationRequest
from inventory_admin.services.registration_service import (
    RegistrationRejected,
    RegistrationSuccess,
    VALIDATION_REASON,
)
from inventory_admin.utils.dependencies import AuthServiceDep, BearerToken, RegistrationServiceDep
from inventory_admin.utils.exceptions import AuthErrorReason

logger = structlog.get_logger(__name__)

router = APIRouter()

REJECTION_STATUS = {
    VALIDATION_REASON: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AuthErrorReason.DUPLICATE_EMAIL.value: status.HTTP_409_CONFLICT,
    AuthErrorReason.WEAK_PASSWORD.value: status.HTTP_400_BAD_REQUEST,
    AuthErrorReason.INVALID_REQUEST.value: status.HTTP_400_BAD_REQUEST,
}


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(
    registration: RegistrationRequest,
    registration_service: RegistrationServiceDep
):
    """
    Register new user

    Signs the user up with Supabase Auth. The profile row is created by a
    database trigger and may appear after this call returns.
    """
    outcome = await registration_service.register(registration)

    if isinstance(outcome, RegistrationSuccess):
        return {
            "success": True,
            "message": outcome.message,
            "user_id": outcome.user_id,
            "email": outcome.email,
            "pending_verification": outcome.pending_verification,
            "profile": ProfileResponse.from_record(outcome.profile).model_dump(mode="json") if outcome.profile else None
        }

    if isinstance(outcome, RegistrationRejected):
        return JSONResponse(
            status_code=REJECTION_STATUS.get(outcome.reason, status.HTTP_400_BAD_REQUEST),
            content={
                "success": False,
                "reason": outcome.reason,
                "message": outcome.message,
                "errors": outcome.errors
            }
        )

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "success": False,
            "reason": AuthErrorReason.PROVIDER_UNAVAILABLE.value,
            "message": outcome.message,
            "errors": []
        }
    )


@router.post("/login")
async def login_user(login_data: LoginRequest, auth_service: AuthServiceDep):
    """
    User login

    Authenticates with Supabase Auth and returns session tokens
    """
    # AuthProviderError is rendered by the application exception handler
    session = await auth_service.login(login_data.email, login_data.password)

    logger.info("User logged in", user_id=session.user_id)

    return {
        "success": True,
        "message": "Login successful",
        "user_id": session.user_id,
        "email": session.email,
        "tokens": {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "expires_at": session.expires_at,
            "token_type": "bearer"
        }
    }


@router.get("/me", response_model=ProfileResponse)
async def current_profile(access_token: BearerToken, auth_service: AuthServiceDep):
    """Profile of the authenticated user"""
    profile = await auth_service.get_current_profile(access_token)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User profile not found"
        )

    return ProfileResponse.from_record(profile)
