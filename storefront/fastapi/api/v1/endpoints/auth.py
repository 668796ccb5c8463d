"""
Admin authentication endpoints.

This module provides the two-step admin login (password, then a mailed
one-time code), logout and a session state probe.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.fastapi.core.config import Settings
from storefront.fastapi.crud.admin import AdminCRUD
from storefront.fastapi.dependencies.database import get_sync_db
from storefront.fastapi.schemas.admin import (
    AdminLogin, AdminLoginResponse, AdminRead, OtpVerify,
    OtpVerifyResponse, LogoutResponse, SessionStateResponse
)
from storefront.fastapi.services.auth_flow import AdminAuthService
from storefront.security.dependencies import CurrentSession, get_auth_service, get_settings
from storefront.security.session import AuthSession, OtpPending


router = APIRouter(tags=["admin-authentication"])


@router.post("/login", response_model=AdminLoginResponse, summary="Admin Login (password step)")
async def login(
    admin_login: AdminLogin,
    session: AuthSession = CurrentSession,
    service: AdminAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings)
):
    """
    Check the admin password and mail a one-time code.

    **Process:**
    1. Reject unknown or inactive accounts
    2. Reject locked accounts (before the password is compared)
    3. Verify the password; a wrong one counts towards the lockout
    4. Issue a 6-digit code valid for 5 minutes and mail it

    **Returns:**
    - **next**: always `otp`
    - **expires_at**: when the code stops being accepted
    - **dev_code**: the code itself, only in development with delivery bypass

    **Errors:**
    - **401**: Invalid email or password
    - **423**: Account temporarily locked
    - **502**: The code could not be delivered
    """
    challenge = await service.login(session, admin_login.email, admin_login.password)

    return AdminLoginResponse(
        email=session.state.pending_admin.email,
        expires_at=challenge.expires_at,
        dev_code=challenge.code if settings.expose_dev_code else None
    )


@router.post("/otp", response_model=OtpVerifyResponse, summary="Admin Login (code step)")
async def verify_otp(
    otp_verify: OtpVerify,
    session: AuthSession = CurrentSession,
    service: AdminAuthService = Depends(get_auth_service),
    db: Session = Depends(get_sync_db)
):
    """
    Submit the mailed code.

    A match signs the admin in and returns where to go next (the admin page
    that was requested before login, or the admin home). Five wrong codes or
    an expired code send the admin back to the password step.

    **Errors:**
    - **409**: No code is pending for this session
    - **400**: Code expired, wrong, or too many attempts
    """
    redirect_to = service.verify_otp(session, otp_verify.code)
    admin = AdminCRUD(db).get_admin(session.admin.id)

    return OtpVerifyResponse(redirect_to=redirect_to, admin=AdminRead.model_validate(admin))


@router.post("/logout", response_model=LogoutResponse, summary="Admin Logout")
async def logout(
    session: AuthSession = CurrentSession,
    service: AdminAuthService = Depends(get_auth_service)
):
    """Sign out. Safe to call from any state."""
    redirect_to = service.logout(session)
    return LogoutResponse(redirect_to=redirect_to)


@router.get("/state", response_model=SessionStateResponse, summary="Session State")
async def session_state(session: AuthSession = CurrentSession):
    state = session.state
    if isinstance(state, OtpPending):
        return SessionStateResponse(
            state=state.kind,
            email=state.pending_admin.email,
            expires_at=state.challenge.expires_at
        )

    admin = session.admin
    return SessionStateResponse(state=session.kind, email=admin.email if admin else None)
