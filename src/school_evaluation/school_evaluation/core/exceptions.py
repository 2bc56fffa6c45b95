from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PreconditionError(ValidationError):
    """Raised when an action is attempted before its required selection is made."""


class NotFoundError(DomainError):
    """Raised when the referenced record does not exist."""


class AuthenticationError(DomainError):
    """Raised when no identity is attached to the request."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class TransportError(DomainError):
    """Raised by the HTTP client when the network or the server fails.

    The message is the server's own message when it sent one.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
