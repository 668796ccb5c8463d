"""
Database engine, session factory and FastAPI session dependency.
"""

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.fastapi.core.init_settings import global_settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # SQLite connections are shared across FastAPI's worker threads
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


def create_db_engine(url: str) -> Engine:
    return create_engine(url, **_engine_kwargs(url))


def create_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = create_db_engine(global_settings.DB_URL)

SessionLocal = create_session_factory(engine)

Base = declarative_base()


def init_db(bind: Engine = None):
    """Create all tables registered on Base.metadata."""
    # Import models so they're registered with Base.metadata
    import storefront.fastapi.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_sync_db(request: Request):
    """Session from the factory the app was created with (see ``create_app``)."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
