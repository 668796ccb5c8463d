import logging
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from storefront.fastapi.core.config import Settings
from storefront.fastapi.core.init_settings import global_settings

logger = logging.getLogger(__name__)


def cors_origins(settings: Settings) -> list:
    origins = [
        settings.CLIENT_URL,
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000"
    ]

    # Add additional origins from environment variable
    if settings.ADDITIONAL_CORS_ORIGINS:
        origins.extend([origin.strip() for origin in settings.ADDITIONAL_CORS_ORIGINS.split(",")])

    # Remove empty strings and duplicates
    return sorted(set(origin for origin in origins if origin))


def setup_cors(app, settings: Settings = None):
    settings = settings or global_settings
    origins = cors_origins(settings)
    logger.info("CORS allowed origins: %s", origins)

    # Credentials are required for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Accept", "Accept-Language"]
    )


def setup_session(app, settings: Settings = None):
    """
    Signed session cookie holding only the server-side session id.

    The cookie expires with the server-side session (30 minutes by default).
    """
    settings = settings or global_settings
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        same_site="lax",
        https_only=settings.is_production
    )
