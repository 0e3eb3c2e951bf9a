"""
Error envelope middleware - Standardize all error responses.

Provides consistent error response format:
{
    "error": {
        "code": "INVALID_PARAMS",
        "message": "Invalid pagination parameter: ...",
        "requestId": "uuid"
    }
}
"""

import logging
from typing import Optional

from flask import Flask, g, jsonify
from werkzeug.exceptions import HTTPException

from ..contracts.types import ContractError
from ..exceptions import ResponseContractError
from ..serializers.response import error_envelope


logger = logging.getLogger('api.middleware.error')


# Error codes reference
ERROR_CODES = {
    # Client errors (4xx)
    "BAD_REQUEST": 400,
    "NOT_FOUND": 404,
    "METHOD_NOT_ALLOWED": 405,
    "UNPROCESSABLE_ENTITY": 422,

    # Contract errors
    "INVALID_PARAMS": 400,
    ContractError.INVALID_CONTRACT_TYPE.value: 400,
    ContractError.INVALID_SMALL_DATA.value: 400,
    ContractError.INVALID_PAGINATED_DATA.value: 400,
    ContractError.MISSING_PAGINATION_METADATA.value: 400,
    ContractError.INVALID_STREAM_DATA.value: 400,
    ContractError.MISSING_FILENAME.value: 400,

    # Server errors (5xx)
    ContractError.STREAM_ABORTED.value: 500,
    "INTERNAL_ERROR": 500,
}


def make_error_response(
    code: str,
    message: str,
    status_code: Optional[int] = None,
    field: Optional[str] = None,
    details: Optional[dict] = None,
    hint: Optional[str] = None,
):
    """
    Create a standardized error response.

    Args:
        code: Error code (e.g., "INVALID_PARAMS")
        message: Human-readable error message
        status_code: HTTP status code (defaults based on error code)
        field: Optional field name that caused the error
        details: Optional additional details dict
        hint: Optional hint for fixing the error

    Returns:
        Tuple of (response, status_code)
    """
    request_id = getattr(g, 'request_id', None)

    # Default status code based on error code
    if status_code is None:
        status_code = ERROR_CODES.get(code, 500)

    response = jsonify(error_envelope(code, message, field=field, details=details, hint=hint))
    if request_id:
        response.headers['X-Request-ID'] = request_id

    return response, status_code


def setup_error_handlers(app: Flask) -> None:
    """
    Set up standardized error handlers on Flask app.

    Handles:
    - ResponseContractError (bad params, stream failures before a response)
    - HTTP exceptions (400, 404, 500, etc.)
    - Unhandled Python exceptions

    Args:
        app: Flask application instance
    """

    @app.errorhandler(ResponseContractError)
    def handle_contract_error(error):
        """Handle contract errors raised inside views."""
        return make_error_response(
            code=error.code,
            message=error.message,
            status_code=error.status_code,
            field=error.field,
            details=error.details,
        )

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        """Handle Flask/Werkzeug HTTP exceptions."""
        # Convert error name to error code
        # "Not Found" -> "NOT_FOUND"
        code = error.name.upper().replace(' ', '_')
        return make_error_response(code, error.description, status_code=error.code)

    @app.errorhandler(Exception)
    def handle_generic_error(error):
        """Handle unhandled Python exceptions."""
        request_id = getattr(g, 'request_id', None)

        # Log the full exception
        logger.exception(
            f"Unhandled error: {error}",
            extra={
                "event": "unhandled_error",
                "request_id": request_id,
                "error_type": type(error).__name__,
            }
        )

        return make_error_response("INTERNAL_ERROR", "An unexpected error occurred", status_code=500)
