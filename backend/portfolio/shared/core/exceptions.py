"""
Custom Exceptions

Every error the API reports on purpose is a PortfolioException. The global
handler turns one into ``{"error": {"code", "message", "details"}}`` with
the exception's HTTP status.

Exception Hierarchy:
====================
    PortfolioException (500, INTERNAL_ERROR)
       │
       ├── AuthenticationError (401)     ← Missing/invalid token, not an admin
       ├── AuthorizationError (403)
       ├── NotFoundError (404)
       │      ├── CategoryNotFoundError
       │      └── MediaNotFoundError
       ├── ValidationError (400)         ← Malformed body, oversized batch
       ├── ConflictError (409)
       │      └── DuplicateResourceError ← Category key taken
       ├── PersistenceError (500)        ← Local transaction rolled back
       └── ServiceUnavailableError (503)
              └── ExternalServiceError
                     └── MediaStoreError ← Cloudinary call failed or timed out

Subclasses only pick a status, a code and a default message.

Usage:
======
    raise CategoryNotFoundError(category_id)
    # 404 {"error": {"code": "NOT_FOUND", "message": "Category with id '...' not found"}}

    raise ValidationError("Cannot delete more than 50 images at once", details={"limit": 50})

Deletion workflows never let a MediaStoreError escape for a single media
item: it is recorded as that item's failure reason.
"""

from typing import Any, Optional


class PortfolioException(Exception):
    """
    Base exception for all portfolio application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status returned to the client
        error_code: Machine-readable error code
        details: Extra JSON-serializable context
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = dict(details or {})
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# 4xx
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(PortfolioException):
    """
    No usable principal (401).

    Also raised for a valid token whose role is not ADMIN on an admin
    route: callers cannot tell "not logged in" from "not allowed".
    """

    status_code = 401
    error_code = "AUTHENTICATION_ERROR"
    default_message = "Unauthorized"


class AuthorizationError(PortfolioException):
    status_code = 403
    error_code = "AUTHORIZATION_ERROR"
    default_message = "Access denied"


class NotFoundError(PortfolioException):
    """
    Resource not found (404).

    Example:
        raise NotFoundError("Image", image_id)
        # "Image with id 'abc-123' not found"
    """

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(message, details)


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: str) -> None:
        super().__init__("Category", category_id)


class MediaNotFoundError(NotFoundError):
    def __init__(self, media_id: str, media_type: str = "media") -> None:
        super().__init__(media_type.capitalize(), media_id)


class ValidationError(PortfolioException):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class ConflictError(PortfolioException):
    status_code = 409
    error_code = "CONFLICT"
    default_message = "Resource conflict"


class DuplicateResourceError(ConflictError):
    """A unique value (category key) is already taken, possibly by a concurrent request."""

    default_message = "Resource already exists"


# ═══════════════════════════════════════════════════════════════════════════════
# 5xx
# ═══════════════════════════════════════════════════════════════════════════════


class PersistenceError(PortfolioException):
    """
    A multi-statement local transaction failed and was rolled back (500).

    Remote side effects that happened before the transaction stay done.
    """

    error_code = "PERSISTENCE_ERROR"
    default_message = "Database operation failed"


class ServiceUnavailableError(PortfolioException):
    status_code = 503
    error_code = "SERVICE_UNAVAILABLE"
    default_message = "Service temporarily unavailable"


class ExternalServiceError(ServiceUnavailableError):
    """A third-party API failed; ``details["service"]`` names it."""

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message or f"{service_name} service error",
            {**(details or {}), "service": service_name},
        )


class MediaStoreError(ExternalServiceError):
    """Cloudinary call failed, returned a non-ok result, or timed out."""

    def __init__(
        self,
        message: str,
        remote_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra = dict(details or {})
        if remote_id:
            extra["remote_id"] = remote_id
        super().__init__("cloudinary", message, extra)
