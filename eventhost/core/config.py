# eventhost/core/config.py

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come from the process environment; a local .env is read when present.
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    # --- Database URLs ---
    DATABASE_URL_PROD: str = ""
    DATABASE_URL_LOCAL: str = "sqlite:///./eventhost.db"

    # --- Auth (tokens are issued by the identity provider) ---
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    APP_URL: str = "http://localhost:3000"

    # --- Email providers ---
    # Defaults used when a host has not stored their own provider settings.
    DEFAULT_EMAIL_PROVIDER: str = "sendgrid"
    DEFAULT_FROM_EMAIL: Optional[str] = None
    SENDGRID_API_KEY: Optional[str] = None
    SENDGRID_API_URL: str = "https://api.sendgrid.com/v3/mail/send"
    EMAILJS_API_URL: str = "https://api.emailjs.com/api/v1.0/email/send"
    EMAILJS_SERVICE_ID: Optional[str] = None
    EMAILJS_TEMPLATE_ID: Optional[str] = None
    EMAILJS_PUBLIC_KEY: Optional[str] = None
    EMAILJS_PRIVATE_KEY: Optional[str] = None
    EMAIL_HTTP_TIMEOUT: float = 10.0

    # --- Sending quota (per host, trailing window) ---
    EMAIL_QUOTA_MAX: int = 100
    EMAIL_QUOTA_WINDOW_HOURS: int = 24

    # --- Public endpoint rate limiting ---
    RATE_LIMIT_ENABLED: bool = True
    PUBLIC_REGISTRATION_RATE_LIMIT: str = "10/minute"

    # --- Background jobs ---
    SCHEDULER_ENABLED: bool = True
    REMINDER_LEAD_HOURS: int = 24
    REMINDER_CHECK_MINUTES: int = 15

    LOG_FILE: Optional[str] = "eventhost.log"

    @property
    def DATABASE_URL(self) -> str:
        return (
            self.DATABASE_URL_LOCAL if self.ENV == "local" else self.DATABASE_URL_PROD
        )


# Create a single instance of the settings
settings = Settings()
