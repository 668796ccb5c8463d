"""
Authentication dependencies for FastAPI.

This module provides dependency functions that load the caller's server-side
session, persist it after the request, protect admin routes and build the
services used by the endpoints.
"""

from datetime import datetime
from typing import Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storefront.fastapi.core.config import Settings
from storefront.fastapi.core.exceptions import NotAuthenticated
from storefront.fastapi.core.init_settings import global_settings
from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.crud.admin import AdminCRUD
from storefront.fastapi.crud.auth_session import AuthSessionStore
from storefront.fastapi.dependencies.database import get_sync_db
from storefront.fastapi.services.archival import ArchivalService
from storefront.fastapi.services.auth_flow import AdminAuthService
from storefront.fastapi.services.mail import OtpMailer
from storefront.fastapi.services.restoration import RestorationService
from storefront.security.session import AdminIdentityRef, AuthSession

SESSION_ID_KEY = "sid"


def get_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", global_settings)


def get_clock() -> Callable[[], datetime]:
    """Time source for the request; overridden in tests."""
    return utcnow


def get_mailer(settings: Settings = Depends(get_settings)) -> OtpMailer:
    return OtpMailer(settings)


def get_auth_session(
    request: Request,
    db: Session = Depends(get_sync_db),
    settings: Settings = Depends(get_settings),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """
    Load the caller's session and persist it once the endpoint is done.

    The signed session cookie carries only the session id; the state itself
    is stored server-side. Changes are saved even when the endpoint raises,
    so failed login steps still record their side effects (cleared challenge,
    consumed try).

    Usage:
        @router.post("/otp")
        async def verify(session: AuthSession = Depends(get_auth_session)):
            ...
    """
    store = AuthSessionStore(db, settings.SESSION_MAX_AGE_SECONDS)
    session = store.load(request.session.get(SESSION_ID_KEY), clock())
    request.session[SESSION_ID_KEY] = session.sid
    try:
        yield session
    finally:
        if session.destroyed:
            request.session.clear()
        store.persist(session, clock())


async def get_current_admin(
    request: Request,
    session: AuthSession = Depends(get_auth_session),
    db: Session = Depends(get_sync_db)
) -> AdminIdentityRef:
    """
    Get the signed-in admin or refuse the request.

    Anonymous callers have the requested path remembered so the login can
    send them back to it.

    Raises:
        NotAuthenticated: No authenticated session, or the admin was
            deactivated or removed since signing in

    Usage:
        @app.get("/admin-only")
        async def admin_route(admin: AdminIdentityRef = RequireAdmin):
            return {"admin": admin.email}
    """
    admin = session.admin
    if admin is None:
        if request.method == "GET":
            session.remember_return_to(request.url.path)
        raise NotAuthenticated()

    record = AdminCRUD(db).get_admin(admin.id)
    if record is None or not record.is_active:
        session.destroy()
        raise NotAuthenticated()

    return admin


def get_auth_service(
    db: Session = Depends(get_sync_db),
    mailer: OtpMailer = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
    clock: Callable[[], datetime] = Depends(get_clock)
) -> AdminAuthService:
    return AdminAuthService(db, mailer, settings=settings, clock=clock)


def get_archival_service(
    db: Session = Depends(get_sync_db),
    clock: Callable[[], datetime] = Depends(get_clock)
) -> ArchivalService:
    return ArchivalService(db, clock=clock)


def get_restoration_service(
    db: Session = Depends(get_sync_db),
    clock: Callable[[], datetime] = Depends(get_clock)
) -> RestorationService:
    return RestorationService(db, clock=clock)


# Convenience dependencies
RequireAdmin = Depends(get_current_admin)
CurrentSession = Depends(get_auth_session)
