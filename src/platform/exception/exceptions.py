from typing import Any, Optional


class CustomBaseError(Exception):
    """
    Root of every error the box office raises on purpose.

    `@Logger.io` logs these without a traceback. `context` holds structured
    detail (conflicting seat ids, a verification reason) that the HTTP layer
    merges into the JSON body next to `detail`.
    """

    def __init__(
        self, message: str, status_code: int = 500, *, context: Optional[dict[str, Any]] = None
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.context: dict[str, Any] = dict(context or {})
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    """Malformed attendee, member, event or seating input. Never reaches storage."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str = 'Not authenticated') -> None:
        super().__init__(message, 401)


class LoginError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str = 'Administrator access required') -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class StorageUnavailable(CustomBaseError):
    """Network, permission or timeout failure from a store or remote service. Retryable."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)
