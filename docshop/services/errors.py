"""Error taxonomy shared by docshop services.

Every service failure carries a short human-readable message, a stable code
and the HTTP status the routers render it with.
"""

from __future__ import annotations


class ServiceError(Exception):
    code = "error"
    status_code = 400

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    code = "validation"
    status_code = 400


class InvalidTransitionError(ValidationError):
    """Order is not in a state that allows the requested step."""

    code = "invalid_transition"
    status_code = 409


class NotFoundError(ServiceError):
    code = "not_found"
    status_code = 404


class ForbiddenError(ServiceError):
    code = "forbidden"
    status_code = 403


class UnauthenticatedError(ServiceError):
    code = "unauthenticated"
    status_code = 401


class ConflictError(ServiceError):
    code = "conflict"
    status_code = 409


class InvalidCredentialsError(ServiceError):
    code = "invalid_credentials"
    status_code = 400


class AdminConfirmationRequiredError(ServiceError):
    code = "admin_confirmation_required"
    status_code = 403


class InvalidCodeError(ServiceError):
    code = "invalid_code"
    status_code = 400


class AlreadyUsedError(ServiceError):
    code = "already_used"
    status_code = 400


class NotApprovedError(ServiceError):
    code = "not_approved"
    status_code = 400


class PersistenceError(ServiceError):
    code = "persistence_failure"
    status_code = 500


class RateLimitedError(ServiceError):
    code = "rate_limited"
    status_code = 429
