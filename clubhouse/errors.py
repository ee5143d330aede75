"""
Error Kinds
Every failure a caller can see, with its HTTP status
"""

from typing import Optional

from fastapi import HTTPException, status


class ClubError(HTTPException):
    """Base error; `kind` is what clients switch on, `detail` is always safe to show"""

    kind = "InternalError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Something went wrong"

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class Unauthenticated(ClubError):
    kind = "Unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ClubError):
    kind = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have access to this resource"


class NotFound(ClubError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(ClubError):
    kind = "Conflict"
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class ValidationError(ClubError):
    kind = "ValidationError"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Invalid request"


class InternalError(ClubError):
    pass


def is_unique_violation(exc: BaseException) -> bool:
    """True when a driver error is a unique-constraint failure (sqlite3 or asyncpg)"""
    names = {cls.__name__ for cls in type(exc).__mro__}
    if "UniqueViolationError" in names:
        return True
    return "IntegrityError" in names and "unique" in str(exc).lower()
