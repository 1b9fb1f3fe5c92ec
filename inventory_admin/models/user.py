"""
User data models and schemas
Identity provider records, local profile records, and auth request/response schemas
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """User role enumeration"""
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"


class IdentityRecord(BaseModel):
    """User as known to the identity provider (Supabase Auth)"""
    id: str = Field(..., description="Provider-issued user UUID")
    email: str
    metadata: Dict[str, Any] = Field(default_factory=dict, description="first_name, last_name, role")
    email_confirmed: bool = False


class ProfileRecord(BaseModel):
    """Row of the public.users table, created by the sign-up trigger"""
    id: int = Field(..., description="Local database ID")
    auth_id: str = Field(..., description="Identity provider user ID")
    email: str
    first_name: str
    last_name: str
    role: UserRole
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def short_auth_id(self) -> str:
        """First eight characters of the auth ID for table display"""
        return f"{self.auth_id[:8]}..." if self.auth_id else "N/A"


class SignUpResult(BaseModel):
    """Successful sign-up as reported by the identity provider"""
    user_id: str
    email: str
    pending_verification: bool


class SessionInfo(BaseModel):
    """Issued session tokens"""
    user_id: str
    email: str
    access_token: str
    refresh_token: str
    expires_at: Optional[int] = None


class RegistrationRequest(BaseModel):
    """
    Registration form input

    Fields are left unconstrained here; shape validation belongs to the
    registration workflow so that bad input is reported as a rejection.
    """
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    first_name: str = ""
    last_name: str = ""
    role: str = UserRole.STAFF.value


class LoginRequest(BaseModel):
    """Login input"""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileResponse(BaseModel):
    """Profile as returned by the JSON API"""
    id: int
    auth_id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    created_at: str

    @classmethod
    def from_record(cls, record: ProfileRecord) -> "ProfileResponse":
        return cls(
            id=record.id,
            auth_id=record.auth_id,
            email=record.email,
            first_name=record.first_name,
            last_name=record.last_name,
            role=record.role,
            created_at=record.created_at.isoformat()
        )


class ProfileListResponse(BaseModel):
    """Schema for the user list API response"""
    users: list[ProfileResponse]
    total: int
