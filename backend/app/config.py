"""
AquaGuard Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before the app starts.

Design Decision:
    We use pydantic-settings instead of raw os.getenv() because:
    1. Type coercion is automatic (str → int, str → bool)
    2. Validation happens at startup, not when the value is first used
    3. Documentation is embedded in the field definitions
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development.
    Production deployments should set GEMINI_API_KEY and APP_ENV=production.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Async SQLite connection string using the aiosqlite driver
    # Format: sqlite+aiosqlite:///<path to file>
    database_url: str = Field(
        default="sqlite+aiosqlite:///./aquaguard.db",
        description="Async SQLAlchemy connection URL for the local store"
    )

    # ── Google Gemini ─────────────────────────────────────────────────────
    # What: API key for Google Generative AI, read once at process start
    # How to obtain: https://aistudio.google.com/app/apikey
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key for leak risk assessments"
    )

    gemini_model: str = Field(default="gemini-3-flash-preview")

    # ── Mode ──────────────────────────────────────────────────────────────
    # development: the frontend runs on its own dev server (CORS allowed)
    # production:  the built frontend in static_dir is served by this app
    app_env: str = Field(default="development")
    static_dir: str = Field(default="./dist")

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Only two modes exist."""
        lower = v.lower()
        if lower not in {"development", "production"}:
            raise ValueError(f"Invalid app_env '{v}'. Must be 'development' or 'production'")
        return lower

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (parsed by the property below)
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Seed Data ─────────────────────────────────────────────────────────
    # Applied on startup only when the corresponding table is empty
    seed_admin_username: str = Field(default="admin")
    seed_admin_password: str = Field(default="password123")
    seed_demo_locations: bool = Field(default=True)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Checks each required field and raises ValueError with guidance.
        """
        errors = []
        if not self.gemini_api_key or self.gemini_api_key == "your_gemini_api_key_here":
            errors.append(
                "GEMINI_API_KEY is not set; assessments will return fallback text. "
                "Get a key at https://aistudio.google.com/app/apikey"
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
