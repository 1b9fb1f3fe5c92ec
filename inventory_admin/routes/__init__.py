"""
API and console routes for the admin console
"""

from . import auth, console, health, users

__all__ = ["auth", "console", "health", "users"]
