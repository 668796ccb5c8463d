"""
FastAPI application for the storefront back-office.

Run with ``uvicorn storefront.fastapi.main:app`` (or ``run_server.py``).
"""

from fastapi import FastAPI

from storefront.fastapi.core.config import Settings
from storefront.fastapi.core.exceptions import register_exception_handlers
from storefront.fastapi.core.init_settings import global_settings
from storefront.fastapi.core.lifespan import lifespan
from storefront.fastapi.core.middleware import setup_cors, setup_session
from storefront.fastapi.core.routers import setup_routers
from storefront.fastapi.dependencies.database import (
    SessionLocal, create_db_engine, create_session_factory, engine
)


def create_app(settings: Settings = None) -> FastAPI:
    """
    Build the application around ``settings``.

    The settings drive the middleware, the lifespan and the database: an app
    whose ``DB_URL`` differs from the process-wide one gets its own engine.
    """
    settings = settings or global_settings

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
        # No public API docs in production
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None,
        openapi_url=None if settings.is_production else "/openapi.json"
    )

    app.state.settings = settings
    if settings.DB_URL == global_settings.DB_URL:
        app.state.engine = engine
        app.state.session_factory = SessionLocal
    else:
        app.state.engine = create_db_engine(settings.DB_URL)
        app.state.session_factory = create_session_factory(app.state.engine)

    setup_session(app, settings)
    setup_cors(app, settings)
    register_exception_handlers(app)
    setup_routers(app)

    @app.get("/health", tags=["main"])
    async def health():
        return {"status": "ok", "version": settings.APP_VERSION}

    return app


app = create_app()
