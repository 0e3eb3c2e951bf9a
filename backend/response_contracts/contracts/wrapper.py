"""
@contract_response decorator - dispatches contracts returned by route handlers.

Usage:
    @bp.route("/exports/<name>")
    @contract_response
    def export(name):
        return create_streamed_contract(open_export(name), f"{name}.csv", "text/csv")

The decorator:
1. Calls the handler
2. Passes anything that is not a contract straight through
3. Dispatches contracts into a FlaskResponseSink
4. Adds X-Request-ID to the response
"""

import functools
import logging
from typing import Any, Callable

from flask import Response, current_app, g, request

from ..sinks.flask_sink import FlaskResponseSink
from ..streams import DEFAULT_CHUNK_SIZE
from .dispatch import ResponseDispatcher
from .params import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationParams, parse_pagination
from .types import is_contract

logger = logging.getLogger('response_contracts.wrapper')


def respond(contract: Any) -> Response:
    """
    Dispatch a contract inside a request and return the Response.

    Invalid contracts give a 400 error envelope, never an exception.
    """
    sink = FlaskResponseSink()
    chunk_size = current_app.config.get('STREAM_CHUNK_SIZE', DEFAULT_CHUNK_SIZE)
    ResponseDispatcher(sink, chunk_size=chunk_size).dispatch(contract)

    response = sink.to_response()
    request_id = getattr(g, 'request_id', None)
    if request_id:
        response.headers['X-Request-ID'] = request_id
    return response


def pagination_from_request() -> PaginationParams:
    """Parse ?page=&pageSize= using the app's configured page size limits."""
    return parse_pagination(
        request.args,
        default_page_size=current_app.config.get('DEFAULT_PAGE_SIZE', DEFAULT_PAGE_SIZE),
        max_page_size=current_app.config.get('MAX_PAGE_SIZE', MAX_PAGE_SIZE),
    )


def contract_response(fn: Callable) -> Callable:
    """Decorator that turns contracts returned by a view into responses."""
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        result = fn(*args, **kwargs)
        if not is_contract(result):
            # Plain Flask return values pass through untouched
            logger.debug(f"Handler {fn.__name__} returned a non-contract, passing through")
            return result
        return respond(result)

    return wrapper
