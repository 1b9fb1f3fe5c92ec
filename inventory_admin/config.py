"""
Configuration Management
Environment-based configuration for Supabase, database, and application settings
"""

from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

from inventory_admin.models.user import UserRole

logger = structlog.get_logger(__name__)


class SupabaseConfig(BaseSettings):
    """Identity provider configuration - both values are required"""

    supabase_url: str
    supabase_anon_key: str

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False
    )

    @field_validator('supabase_url', 'supabase_anon_key')
    @classmethod
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('Supabase URL and anon key must not be empty')
        return v.strip()

    def log_config(self):
        """Log configuration (without the key)"""
        logger.info("Supabase configured", url=self.supabase_url)


class DatabaseConfig(BaseSettings):
    """Direct Postgres connection to the Supabase database"""

    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "postgres"
    db_user: str = "postgres"
    db_password: str = ""
    db_ssl: bool = False

    # Pool settings
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_command_timeout: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False
    )

    @field_validator('db_port')
    @classmethod
    def validate_db_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError('Database port must be between 1 and 65535')
        return v

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(
            "Database configured",
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
            user=self.db_user,
            ssl=self.db_ssl,
            pool_min=self.db_pool_min_size,
            pool_max=self.db_pool_max_size
        )


class AppConfig(BaseSettings):
    """Application Configuration"""

    # Service info
    service_name: str = "inventory-admin"
    service_version: str = "1.0.0"
    environment: str = "development"
    log_level: str = "INFO"

    # HTTP server
    port: int = 5000
    client_url: str = "http://localhost:3000"

    # Registration
    # Seconds to wait for the trigger-created profile after sign-up; 0 disables the wait
    profile_wait_timeout: float = 0.0
    profile_poll_interval: float = 0.5
    registrable_roles: List[UserRole] = [UserRole.ADMIN, UserRole.MANAGER, UserRole.STAFF]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False
    )

    @field_validator('profile_wait_timeout', 'profile_poll_interval')
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError('Profile wait settings must not be negative')
        return v

    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Configuration instances, created on first use
_supabase_config: Optional[SupabaseConfig] = None
_db_config: Optional[DatabaseConfig] = None
_app_config: Optional[AppConfig] = None


def get_supabase_config() -> SupabaseConfig:
    """Get identity provider configuration; raises if SUPABASE_URL/SUPABASE_ANON_KEY are missing"""
    global _supabase_config
    if _supabase_config is None:
        _supabase_config = SupabaseConfig()
    return _supabase_config


def get_db_config() -> DatabaseConfig:
    """Get database configuration instance"""
    global _db_config
    if _db_config is None:
        _db_config = DatabaseConfig()
    return _db_config


def get_app_config() -> AppConfig:
    """Get application configuration instance"""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config


def reset_config():
    """Drop cached configuration so the next getter re-reads the environment"""
    global _supabase_config, _db_config, _app_config
    _supabase_config = None
    _db_config = None
    _app_config = None
