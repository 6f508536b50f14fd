"""
Application configuration settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator

DEV_JWT_SECRET = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=[".env", "../.env"], case_sensitive=False, extra="ignore"
    )

    # Application
    app_name: str = Field("Event Finder API", alias="APP_NAME")

    # Environment
    environment: str = Field("development", alias="ENVIRONMENT")
    debug: bool = Field(False, alias="DEBUG")

    # Server
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(5050, alias="PORT")
    host_url: str = Field("http://localhost:5050", alias="HOST_URL")
    frontend_url: str = Field("http://localhost:5173", alias="FRONTEND_URL")

    # Database; use postgresql+asyncpg://... for PostgreSQL
    database_url: str = Field(
        "sqlite+aiosqlite:///./eventfinder.db", alias="DATABASE_URL"
    )
    debug_sql: bool = Field(False, alias="DATABASE_ECHO")

    # Session token (JWT carried in a cookie or bearer header)
    jwt_secret_key: str = Field(
        DEV_JWT_SECRET, alias="JWT_SECRET_KEY"
    )
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    jwt_expires_minutes: int = Field(24 * 60, alias="JWT_EXPIRATION_MINUTES")
    session_cookie_name: str = Field("eventfinder_session", alias="SESSION_COOKIE_NAME")
    session_cookie_secure: bool = Field(False, alias="SESSION_COOKIE_SECURE")

    # Google OAuth
    google_client_id: str = Field("", alias="GOOGLE_CLIENT_ID")
    google_client_secret: str = Field("", alias="GOOGLE_CLIENT_SECRET")
    google_auth_url: str = Field(
        "https://accounts.google.com/o/oauth2/v2/auth", alias="GOOGLE_AUTH_URL"
    )
    google_token_url: str = Field(
        "https://oauth2.googleapis.com/token", alias="GOOGLE_TOKEN_URL"
    )
    google_userinfo_url: str = Field(
        "https://openidconnect.googleapis.com/v1/userinfo", alias="GOOGLE_USERINFO_URL"
    )

    # Geocoding / routing providers
    opencage_api_key: str = Field("", alias="OPENCAGE_API_KEY")
    opencage_base_url: str = Field(
        "https://api.opencagedata.com", alias="OPENCAGE_BASE_URL"
    )
    google_maps_api_key: str = Field("", alias="GOOGLE_MAPS_API_KEY")
    google_maps_base_url: str = Field(
        "https://maps.googleapis.com", alias="GOOGLE_MAPS_BASE_URL"
    )
    http_timeout_seconds: float = Field(5.0, alias="HTTP_TIMEOUT_SECONDS")
    geocode_cache_size: int = Field(0, alias="GEOCODE_CACHE_SIZE")

    # Verification document uploads
    upload_dir: str = Field("uploads", alias="UPLOAD_DIR")
    upload_base_url: str = Field(
        "http://localhost:5050/api/users/me/verification-document",
        alias="UPLOAD_BASE_URL",
    )
    max_upload_bytes: int = Field(5 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")

    # CORS
    cors_origins: str = Field("http://localhost:5173", alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(True, alias="CORS_ALLOW_CREDENTIALS")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("json", alias="LOG_FORMAT")

    def get_cors_origins(self) -> list[str]:
        """Parse CORS origins from string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @model_validator(mode="after")
    def _require_real_secret(self) -> "Settings":
        if (
            self.environment == "production"
            and self.jwt_secret_key == DEV_JWT_SECRET
        ):
            raise ValueError("JWT_SECRET_KEY must be set in production")
        return self


_settings = None


def get_settings() -> Settings:
    """Get settings instance (useful for dependency injection)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
