import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from storefront.fastapi.core.config import Settings
from storefront.fastapi.core.logging_config import setup_logging
from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.crud.admin import create_admin, get_admin_count
from storefront.fastapi.crud.auth_session import AuthSessionStore
from storefront.fastapi.crud.schema import get_schema_capabilities, refresh_schema_cache
from storefront.fastapi.dependencies.database import init_db
from storefront.fastapi.schemas.admin import AdminCreate

logger = logging.getLogger(__name__)


def bootstrap_admin(db, settings: Settings):
    """Create the initial admin from settings when the table is empty."""
    admin_count = get_admin_count(db, include_inactive=True)
    if admin_count:
        logger.info("Found %s existing admin(s)", admin_count)
        return None

    if not (settings.INITIAL_ADMIN_EMAIL and settings.INITIAL_ADMIN_PASSWORD):
        logger.warning("No admin exists; set INITIAL_ADMIN_EMAIL and INITIAL_ADMIN_PASSWORD or run create_admin.py")
        return None

    admin = create_admin(db, AdminCreate(
        email=settings.INITIAL_ADMIN_EMAIL,
        password=settings.INITIAL_ADMIN_PASSWORD,
        is_active=True
    ))
    logger.info("Created initial admin %s; change the password after first login", admin.email)
    return admin


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    setup_logging(settings.LOG_LEVEL)

    # Initialize the database and load the live schema once
    init_db(app.state.engine)
    refresh_schema_cache()
    get_schema_capabilities(app.state.engine)

    sync_db = app.state.session_factory()
    try:
        bootstrap_admin(sync_db, settings)
        purged = AuthSessionStore(sync_db, settings.SESSION_MAX_AGE_SECONDS).purge_expired(utcnow())
        if purged:
            logger.info("Removed %s expired admin session(s)", purged)
    finally:
        sync_db.close()

    yield
