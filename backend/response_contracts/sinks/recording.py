"""
In-memory sink that records everything written to it.

Used for tests and for rendering contracts outside a request. Piped streams
are not consumed until drain() is called, the same as a real server which
pulls chunks after the view has returned.
"""

from typing import Any, Dict, List, Optional

from ..exceptions import StreamAborted
from ..streams import StreamPump
from .base import ResponseSink


class RecordingSink(ResponseSink):

    def __init__(self):
        super().__init__()
        self.status_code = 200
        self.headers: Dict[str, str] = {}
        self.body: Optional[Dict[str, Any]] = None
        self.pump: Optional[StreamPump] = None
        self.chunks: List[bytes] = []
        self.stream_aborted: Optional[StreamAborted] = None

    def set_status(self, status_code: int) -> None:
        self.status_code = status_code

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def write_json(self, body: Dict[str, Any]) -> None:
        self.body = body

    def pipe(self, pump: StreamPump) -> None:
        self.pump = pump

    def drain(self) -> bytes:
        """
        Pull the piped stream to its end and return the bytes received.

        A failing stream leaves the sink ABORTED and returns what arrived
        before the failure.
        """
        if self.pump is None:
            return b""
        try:
            for chunk in self.pump:
                self.chunks.append(chunk)
        except StreamAborted as e:
            self.stream_aborted = e
        return self.content

    def close(self) -> None:
        """Simulate the consumer going away mid-transfer."""
        if self.pump is not None:
            self.pump.close()

    @property
    def content(self) -> bytes:
        return b"".join(self.chunks)
