"""
Global middleware for API requests.

Provides:
- Request ID injection (X-Request-ID)
- Error envelope standardization
- Request usage logging
"""

from .request_id import setup_request_id_middleware
from .error_envelope import setup_error_handlers, make_error_response, ERROR_CODES
from .request_logging import setup_request_logging_middleware

__all__ = [
    'setup_request_id_middleware',
    'setup_error_handlers',
    'make_error_response',
    'ERROR_CODES',
    'setup_request_logging_middleware',
]
