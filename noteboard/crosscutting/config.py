"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match current behavior

Collaborators:
  - api/main.py: reads settings for CORS, pool and startup validation
  - container.py: reads settings for repository selection and policy mode
  - schemas/*: read settings for request validation limits

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic: pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache for performance
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: Application environment (development/test/production)
        allowed_origins: Comma-separated CORS origins
        visibility_mode: strict|overview (team roles see sibling teams in overview)
        max_title_chars: Maximum note/event title length (default: 200)
        max_content_chars: Maximum note content / event description length
        max_comment_chars: Maximum comment length
        max_tags: Maximum tags per note
        max_tag_chars: Maximum length of a single tag
        max_body_bytes: Max request body size (default: 10MB)
        jwt_secret: Secret for signing JWT access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes (default: 60)
        jwt_cookie_name: Cookie name for access token
        jwt_cookie_secure: Set Secure on auth cookies
        min_password_chars: Minimum password length (default: 6)
    """

    # Required (no defaults)
    database_url: str

    # Environment
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # CORS configuration
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"
    cors_allow_credentials: bool = True

    # Visibility policy
    visibility_mode: str = "strict"

    # API limits
    max_title_chars: int = 200
    max_content_chars: int = 50_000
    max_comment_chars: int = 5_000
    max_tags: int = 20
    max_tag_chars: int = 50

    # Security - Hardening
    max_body_bytes: int = 10 * 1024 * 1024  # 10MB
    metrics_enabled: bool = True

    # Security - JWT Auth
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 60
    jwt_cookie_name: str = "access_token"
    jwt_cookie_secure: bool = False
    min_password_chars: int = 6

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    @field_validator("visibility_mode")
    @classmethod
    def visibility_mode_valid(cls, v: str) -> str:
        mode = (v or "strict").strip().lower()
        if mode not in {"strict", "overview"}:
            raise ValueError("visibility_mode must be strict or overview")
        return mode

    @field_validator("jwt_access_ttl_minutes", "min_password_chars")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @model_validator(mode="after")
    def validate_pool_sizes(self):
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if not self.jwt_cookie_secure:
            raise ValueError("JWT_COOKIE_SECURE must be true in production")

        return self

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
