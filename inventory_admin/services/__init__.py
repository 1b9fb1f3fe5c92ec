"""
Business logic services for the admin console
"""

from .auth_service import AuthService
from .registration_service import RegistrationService

__all__ = ["AuthService", "RegistrationService"]
