"""
Request ID middleware - Inject X-Request-ID for request correlation.

Provides:
- Request ID on flask.g for every request (error envelopes read it)
- Response header echo, including on streamed downloads
"""

import re
import uuid

from flask import Flask, g, request

REQUEST_ID_HEADER = 'X-Request-ID'

# Incoming IDs are echoed into headers, so only accept a safe charset
_VALID_REQUEST_ID = re.compile(r'^[A-Za-z0-9._:-]{1,128}$')


def _incoming_request_id() -> str:
    request_id = request.headers.get(REQUEST_ID_HEADER, '')
    if _VALID_REQUEST_ID.match(request_id):
        return request_id
    return str(uuid.uuid4())


def setup_request_id_middleware(app: Flask) -> None:
    """
    Set up request ID middleware on Flask app.

    Args:
        app: Flask application instance
    """

    @app.before_request
    def inject_request_id():
        g.request_id = _incoming_request_id()

    @app.after_request
    def add_request_id_header(response):
        request_id = getattr(g, 'request_id', None)
        if request_id and REQUEST_ID_HEADER not in response.headers:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response
