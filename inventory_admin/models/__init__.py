"""
Data models for the admin console
"""

from .user import (
    UserRole,
    IdentityRecord,
    ProfileRecord,
    SignUpResult,
    SessionInfo,
    RegistrationRequest,
    LoginRequest,
    ProfileResponse,
    ProfileListResponse,
)

__all__ = [
    "UserRole",
    "IdentityRecord",
    "ProfileRecord",
    "SignUpResult",
    "SessionInfo",
    "RegistrationRequest",
    "LoginRequest",
    "ProfileResponse",
    "ProfileListResponse",
]
