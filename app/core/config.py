"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. FIREBASE_PROJECT_ID is required: it scopes the
Firestore database and is the audience ID tokens are verified against.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Firestore "in" queries accept at most 10 values.
FIRESTORE_IN_QUERY_MAX = 10


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "collabnotes"
    app_version: str = "1.0.0"
    debug: bool = False

    # Firebase / Firestore: use key (env) or path (file). Project id is always required.
    firebase_project_id: str = ""
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Links in notification emails point here
    frontend_url: str = "http://localhost:3000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Sharing and search
    shared_notes_chunk_size: int = FIRESTORE_IN_QUERY_MAX
    search_default_limit: int = 10
    search_max_limit: int = 50
    search_min_query_length: int = 3

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and query limits."""
        if not self.firebase_project_id.strip():
            raise ValueError(
                "FIREBASE_PROJECT_ID is required (used for Firestore and ID token audience). "
                "Set in environment or .env file."
            )
        if not 1 <= self.shared_notes_chunk_size <= FIRESTORE_IN_QUERY_MAX:
            raise ValueError(
                f"shared_notes_chunk_size must be between 1 and {FIRESTORE_IN_QUERY_MAX}, "
                f"got: {self.shared_notes_chunk_size}"
            )
        if self.search_default_limit < 1 or self.search_default_limit > self.search_max_limit:
            raise ValueError(
                "search_default_limit must be at least 1 and not exceed search_max_limit"
            )
        return self

    @property
    def origins(self) -> list[str]:
        """CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
