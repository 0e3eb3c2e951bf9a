"""
Flask response sink.

Collects what the dispatcher writes and turns it into a flask.Response.
Streams become a direct-passthrough response whose iterable is the pump, so
the WSGI server pulls chunks straight from the source and calls the pump's
close() when the client disconnects.
"""

from typing import Any, Dict, Optional

from flask import Response, jsonify
from werkzeug.datastructures import Headers

from ..streams import StreamPump
from .base import ResponseSink


class FlaskResponseSink(ResponseSink):
    """Sink that produces a flask.Response. JSON bodies need an app context."""

    def __init__(self):
        super().__init__()
        self.status_code = 200
        self.headers = Headers()
        self.body: Optional[Dict[str, Any]] = None
        self.pump: Optional[StreamPump] = None

    def set_status(self, status_code: int) -> None:
        self.status_code = status_code

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def write_json(self, body: Dict[str, Any]) -> None:
        self.body = body

    def pipe(self, pump: StreamPump) -> None:
        self.pump = pump

    def to_response(self) -> Response:
        """Build the Response for whatever was written."""
        if self.pump is not None:
            return Response(
                self.pump,
                status=self.status_code,
                headers=self.headers,
                direct_passthrough=True,
            )

        response = jsonify(self.body if self.body is not None else {})
        response.status_code = self.status_code
        for name, value in self.headers.items():
            response.headers[name] = value
        return response
