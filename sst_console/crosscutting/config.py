"""
Name: Console Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the console's historical behavior

Collaborators:
  - api/main.py: reads settings for CORS and lifespan wiring
  - container.py: builds clients, retry policy and stores from settings
  - crosscutting/logger.py: log level and format

Constraints:
  - No business logic, pure configuration
  - Endpoint URLs may be empty: an empty reports URL means "unconfigured"

Notes:
  - Singleton via lru_cache
  - Timeouts are expressed in milliseconds to match the audit endpoint contract
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_LANGUAGES: tuple[str, ...] = ("es", "en", "zh")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        identity_backend_url: Base URL of the hosted identity/data backend
        identity_backend_anon_key: Public API key sent as `apikey` header
        session_file: Where the identity session is persisted ("" = disabled)
        action_script_url: External audit endpoint (POST)
        reports_api_url: External reports endpoint (GET, "" = unconfigured)
        action_script_timeout_ms: Hard timeout per audit POST (default: 15000)
        action_script_retry_attempts: Attempt ceiling for audit POST (default: 2)
        action_script_backoff_ms: Linear backoff unit between attempts (default: 1000)
        action_script_fallback_mode: Treat exhausted retries as success (default: True)
        action_script_log_errors: Log audit failures locally (default: True)
        users_per_page: User table page size (default: 10)
        toast_duration_ms: Toast auto-dismiss delay (default: 5000)
        default_language: Language used when no preference is stored (default: es)
        preferences_file: JSON file holding the language preference
        language_storage_key: Key of the language preference (default: language)
    """

    # Environment
    app_env: str = "development"
    log_level: str = "INFO"
    log_json: bool = True

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Identity / data backend
    identity_backend_url: str
    identity_backend_anon_key: str
    session_file: str = ""

    # Audit + reports endpoint
    action_script_url: str = ""
    reports_api_url: str = ""
    action_script_timeout_ms: int = 15_000
    action_script_retry_attempts: int = 2
    action_script_backoff_ms: int = 1_000
    action_script_fallback_mode: bool = True
    action_script_log_errors: bool = True

    # Console behavior
    users_per_page: int = 10
    toast_duration_ms: int = 5_000
    default_language: str = "es"
    preferences_file: str = ".sst_console/preferences.json"
    language_storage_key: str = "language"

    @field_validator("identity_backend_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        url = (v or "").strip().rstrip("/")
        if not url:
            raise ValueError("identity_backend_url must not be empty")
        return url

    @field_validator("users_per_page", "toast_duration_ms", "action_script_timeout_ms")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("action_script_retry_attempts")
    @classmethod
    def attempts_at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("action_script_retry_attempts must be >= 1")
        return v

    @field_validator("action_script_backoff_ms")
    @classmethod
    def backoff_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("action_script_backoff_ms must be >= 0")
        return v

    @field_validator("default_language")
    @classmethod
    def language_supported(cls, v: str) -> str:
        lang = (v or "es").strip().lower()
        if lang not in SUPPORTED_LANGUAGES:
            raise ValueError(f"default_language must be one of {SUPPORTED_LANGUAGES}")
        return lang

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

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
