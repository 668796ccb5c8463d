"""
Domain errors and the exception handlers that turn them into JSON responses.

Authentication errors are recoverable and describe the failed step; anything
that is not a ``StorefrontError`` is answered with an opaque 500 after being
logged.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base class for errors that map to a well-defined HTTP response."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "error"
    message: str = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


# Authentication

class InvalidCredentials(StorefrontError):
    # Same text for unknown e-mail, inactive account and wrong password
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    message = "Invalid email or password."


class AccountLocked(StorefrontError):
    status_code = status.HTTP_423_LOCKED
    code = "account_locked"
    message = "Account temporarily locked. Try again later."


class DeliveryFailure(StorefrontError):
    status_code = status.HTTP_502_BAD_GATEWAY
    code = "delivery_failure"
    message = "Could not send the verification code. Please try again."


class NoPendingChallenge(StorefrontError):
    status_code = status.HTTP_409_CONFLICT
    code = "no_pending_challenge"
    message = "No verification in progress. Please sign in again."


class ChallengeExpired(StorefrontError):
    code = "challenge_expired"
    message = "Code expired. Please sign in again."


class InvalidCode(StorefrontError):
    code = "invalid_code"
    message = "Invalid code. Please try again."


class TooManyAttempts(StorefrontError):
    code = "too_many_attempts"
    message = "Too many attempts. Please sign in again."


class NotAuthenticated(StorefrontError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "not_authenticated"
    message = "Admin sign-in required."


# Recycle bin and entities

class ArchiveNotFound(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "archive_not_found"
    message = "Archive entry not found."


class UnsupportedEntityType(StorefrontError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "unsupported_entity_type"
    message = "Unsupported entity type."


class RestoreConflict(StorefrontError):
    status_code = status.HTTP_409_CONFLICT
    code = "restore_conflict"
    message = "Could not pick a free slug for the restored entry. Please retry."


class EntityNotFound(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Not found."


class DuplicateSlug(StorefrontError):
    status_code = status.HTTP_409_CONFLICT
    code = "duplicate_slug"
    message = "Slug already exists."


class DuplicateAdminEmail(StorefrontError):
    code = "duplicate_email"
    message = "Email already registered."


def error_body(exc: StorefrontError) -> dict:
    return {"success": False, "error": exc.code, "message": exc.message}


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "internal_error", "message": "Something went wrong."},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
