"""
Exception classes for response contracts.

Validation problems are never raised: they come back as
ValidationResult failures. These exceptions cover the remaining cases:
- Bad request parameters (InvalidParamsError)
- A stream that failed mid-transfer (StreamAborted)
- Misuse of a sink's dispatch state machine (InvalidStateTransition)
"""

from typing import Any, Dict, Optional


class ResponseContractError(Exception):
    """Base exception for response contract errors rendered as an error envelope."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.field = field
        self.details = details or {}


class InvalidParamsError(ResponseContractError):
    """Raised when request parameters cannot be normalized."""

    code = "INVALID_PARAMS"
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, received_value: Any = None):
        super().__init__(message, field=field)
        self.received_value = received_value


class StreamAborted(ResponseContractError):
    """
    Raised out of a stream pump when the source fails mid-transfer.

    The source's exception is chained as __cause__. Raising out of the WSGI
    iterable makes the server drop the connection, so the client sees a
    truncated response.
    """

    code = "StreamAborted"
    status_code = 500


class InvalidStateTransition(ResponseContractError):
    """Raised when a sink is moved between dispatch states out of order."""

    code = "INVALID_STATE_TRANSITION"
    status_code = 500
