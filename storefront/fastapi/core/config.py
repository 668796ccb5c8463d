from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "Storefront Back-Office"
    APP_VERSION: str = "1.0.0"

    # Database URL (read from .env file)
    DATABASE_URL: str = ''

    # Server-side session cookie
    SESSION_SECRET_KEY: str = 'default-session-key-change-in-production'
    SESSION_COOKIE_NAME: str = 'storefront_session'
    SESSION_MAX_AGE_SECONDS: int = 1800

    # Password step
    LOGIN_MAX_FAILURES: int = 5
    LOGIN_LOCK_MINUTES: int = 10

    # One-time-code step
    OTP_TTL_MINUTES: int = 5
    OTP_MAX_TRIES: int = 5
    OTP_MAIL_TIMEOUT_SECONDS: float = 8.0
    # Keep the challenge alive when the code could not be mailed.
    # Needs an explicit opt-in and is ignored in prod.
    OTP_DELIVERY_FAILURE_BYPASS: bool = False
    OTP_EXPOSE_DEV_CODE: bool = False

    # Outbound mail
    SMTP_HOST: str = 'smtp.gmail.com'
    SMTP_PORT: int = 587
    SMTP_START_TLS: bool = True
    SMTP_USER: Optional[str] = None
    SMTP_PASS: Optional[str] = None
    MAIL_FROM: Optional[str] = None

    # Admin console
    ADMIN_HOME_PATH: str = '/admin'
    ADMIN_LOGIN_PATH: str = '/admin/login'
    RECYCLE_LIST_LIMIT: int = 500

    # Bootstrap admin (created on startup when no admin exists)
    INITIAL_ADMIN_EMAIL: Optional[str] = None
    INITIAL_ADMIN_PASSWORD: Optional[str] = None

    # Client URL for CORS
    CLIENT_URL: str = 'http://localhost:3000'
    ADDITIONAL_CORS_ORIGINS: str = ''

    LOG_LEVEL: str = 'INFO'

    model_config = SettingsConfigDict(env_file=".env", extra='allow')

    @property
    def DB_URL(self):
        if self.ENV_MODE == "dev":
            return self.DEV_DB_URL
        else:
            if self.DATABASE_URL:
                return self.DATABASE_URL
            else:
                return '{}://{}:{}@{}:{}/{}'.format(
                    self.DB_ENGINE,
                    self.DB_USERNAME,
                    self.DB_PASS,
                    self.DB_HOST,
                    self.DB_PORT,
                    self.DB_NAME
                )

    @property
    def is_production(self) -> bool:
        return self.ENV_MODE == "prod"

    @property
    def allow_delivery_bypass(self) -> bool:
        """Whether a failed OTP e-mail may still lead to the code-entry step."""
        return self.OTP_DELIVERY_FAILURE_BYPASS and not self.is_production

    @property
    def expose_dev_code(self) -> bool:
        return self.OTP_EXPOSE_DEV_CODE and self.allow_delivery_bypass

class DevSettings(Settings):
    # Environment mode: 'dev' or 'prod'
    ENV_MODE: str = 'dev'

    # Database settings for development
    @property
    def DEV_DB_URL(self) -> str:
        # Use the configured DATABASE_URL in dev mode if provided
        # Otherwise fall back to SQLite
        return self.DATABASE_URL if self.DATABASE_URL else "sqlite:///./dev.db"

    model_config = SettingsConfigDict(env_file=".env", extra='allow')

class ProdSettings(Settings):
    # Environment mode: 'dev' or 'prod'
    ENV_MODE: str = 'prod'

    # Database settings for production
    DB_ENGINE: str = 'postgresql+psycopg'
    DB_USERNAME: str = ''
    DB_PASS: str = ''
    DB_HOST: str = ''
    DB_PORT: str = ''
    DB_NAME: str = ''

    model_config = SettingsConfigDict(env_file=".env", extra='allow')

def get_settings(env_mode: str = "dev"):
    if env_mode == "dev":
        return DevSettings()
    return ProdSettings()
