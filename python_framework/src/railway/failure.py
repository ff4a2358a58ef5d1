"""
Failure description — structured error information for infrastructure failures.

Domain code puts its own closed error unions on the failure track. When the
cause is technical (a timeout, a refused connection, a 5xx from a remote
service) there is no domain meaning to attach, so the failure is described by
an ErrorCode plus a message and the originating exception.

Enum + frozen dataclass gives __eq__, __hash__ and __repr__ for free, and
Enum members are singleton-comparable with `is`.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """
    Structured error codes for technical failures.

    Organized by HTTP status range so they map naturally onto remote responses:
    - Client errors (4xx): VALIDATION, AUTHENTICATION, AUTHORIZATION, NOT_FOUND, RATE_LIMIT
    - Server errors (5xx): TECHNICAL, CONFIGURATION, EXTERNAL_SERVICE, UNAVAILABLE, TIMEOUT, UNKNOWN
    """

    # --- Client-side errors (4xx HTTP range) ---
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Request rejected by a remote service as malformed (→ 400/422)."""

    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    """Invalid credentials, expired tokens (→ 401)."""

    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    """Insufficient permissions (→ 403)."""

    NOT_FOUND = "NOT_FOUND"
    """Remote resource doesn't exist (→ 404)."""

    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    """Request limits exceeded (→ 429)."""

    # --- Server-side errors (5xx HTTP range) ---
    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Unexpected local infrastructure issue (→ 500)."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """System misconfiguration (→ 500)."""

    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    """External API call failures (→ 502)."""

    SERVICE_UNAVAILABLE_ERROR = "SERVICE_UNAVAILABLE_ERROR"
    """Service maintenance or overload (→ 503)."""

    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    """Operation exceeded time limit (→ 504)."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unexpected/unclassified failures (→ 500)."""

    @property
    def is_transient(self) -> bool:
        """
        True when repeating the same call later may succeed.

        Callers use this to choose between retrying and giving up; it never
        triggers a retry by itself.
        """
        return self in _TRANSIENT_CODES


_TRANSIENT_CODES = frozenset(
    {
        ErrorCode.RATE_LIMIT_ERROR,
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        ErrorCode.SERVICE_UNAVAILABLE_ERROR,
        ErrorCode.TIMEOUT_ERROR,
    }
)


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorCode.TIMEOUT_ERROR, "Address service timed out")
    >>> desc.code
    <ErrorCode.TIMEOUT_ERROR: 'TIMEOUT_ERROR'>
    >>> desc.message
    'Address service timed out'
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC), compare=False)

    @staticmethod
    def create(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> FailureDescription:
        return FailureDescription(code=code, message=message, exception=exception)

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__))
        return f"{self.message}\n{tb}"
