"""
Error taxonomy for the admin console

Each component boundary raises one of these; a missing row is returned as
None rather than raised.
"""

from enum import Enum
from typing import List, Optional


class AuthErrorReason(str, Enum):
    """Reasons the identity provider can refuse a request"""
    DUPLICATE_EMAIL = "duplicate_email"
    WEAK_PASSWORD = "weak_password"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_REQUEST = "invalid_request"
    PROVIDER_UNAVAILABLE = "provider_unavailable"


class AdminConsoleError(Exception):
    """Base class for admin console errors"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(AdminConsoleError):
    """Local pre-flight validation failure; never reaches the network"""

    status_code = 422

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors) or "Invalid input")
        self.errors = list(errors)


class AuthProviderError(AdminConsoleError):
    """Identity provider refused the request or could not be reached"""

    _status_codes = {
        AuthErrorReason.DUPLICATE_EMAIL: 409,
        AuthErrorReason.WEAK_PASSWORD: 400,
        AuthErrorReason.INVALID_CREDENTIALS: 401,
        AuthErrorReason.INVALID_REQUEST: 400,
        AuthErrorReason.PROVIDER_UNAVAILABLE: 503,
    }

    def __init__(self, reason: AuthErrorReason, message: Optional[str] = None):
        super().__init__(message or reason.value.replace("_", " ").capitalize())
        self.reason = reason
        self.status_code = self._status_codes[reason]

    @property
    def is_transport_failure(self) -> bool:
        return self.reason == AuthErrorReason.PROVIDER_UNAVAILABLE


class StoreError(AdminConsoleError):
    """Profile store query failure or lost connectivity"""

    status_code = 503
