"""
Readable stream support for streamed contracts.

A readable stream is either:
- a binary file-like object with a callable read(size), or
- an iterator yielding bytes (str chunks are encoded as UTF-8)

StreamPump turns one into the iterable a WSGI server pulls from. The server
only asks for the next chunk when it has written the previous one, so
backpressure comes from the pull model and nothing is buffered here.

The pump releases its source (calls close() if the source has one) exactly
once on every exit path:
- end of data
- source error (the pump raises StreamAborted)
- abort() before the transfer starts
- external cancellation (the server calls close() on client disconnect)
"""

import logging
from collections.abc import Iterator, Mapping
from typing import Any, Callable, Optional

from .exceptions import StreamAborted

logger = logging.getLogger('response_contracts.streams')

DEFAULT_CHUNK_SIZE = 64 * 1024

_NOT_STREAMS = (str, bytes, bytearray, memoryview, Mapping, list, tuple)


def is_readable_stream(value: Any) -> bool:
    """Check whether value can be pumped into a response."""
    if value is None or isinstance(value, _NOT_STREAMS):
        return False
    if getattr(value, 'closed', False) is True:
        return False
    if callable(getattr(value, 'read', None)):
        return True
    return isinstance(value, Iterator)


class StreamPump:
    """
    Iterable that moves chunks from a readable stream to a response.

    Callbacks:
        on_end: called once when the source is exhausted
        on_error: called once with the source's exception before
            StreamAborted is raised
        on_cancel: called once when close() arrives before the end
    """

    def __init__(
        self,
        source: Any,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        on_end: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self.source = source
        self.chunk_size = chunk_size
        self.bytes_sent = 0
        self._on_end = on_end
        self._on_error = on_error
        self._on_cancel = on_cancel
        self._finished = False
        self._released = False

        read = getattr(source, 'read', None)
        self._read = read if callable(read) else None
        self._iterator = None if self._read else iter(source)

    @property
    def released(self) -> bool:
        return self._released

    def __iter__(self):
        return self

    def __next__(self) -> bytes:
        if self._finished:
            raise StopIteration

        try:
            chunk = self._next_chunk()
        except Exception as e:
            self.abort(e)
            raise StreamAborted(
                "Stream failed during transfer",
                details={"bytesSent": self.bytes_sent},
            ) from e

        if chunk is None:
            self._finish()
            logger.debug(f"Stream completed, {self.bytes_sent} bytes sent")
            if self._on_end:
                self._on_end()
            raise StopIteration

        self.bytes_sent += len(chunk)
        return chunk

    def abort(self, error: BaseException) -> None:
        """Release the source and report error instead of transferring."""
        if self._finished:
            return
        self._finish()
        logger.error(
            f"Stream source failed after {self.bytes_sent} bytes: {error}",
            exc_info=error,
        )
        if self._on_error:
            self._on_error(error)

    def close(self) -> None:
        """WSGI close hook. Releases the source if the transfer did not finish."""
        if self._finished:
            return
        self._finish()
        logger.warning(f"Stream cancelled after {self.bytes_sent} bytes")
        if self._on_cancel:
            self._on_cancel()

    def _next_chunk(self) -> Optional[bytes]:
        """Return the next non-empty chunk, or None at end of data."""
        if self._read is not None:
            chunk = self._read(self.chunk_size)
            if not chunk:
                return None
            return _as_bytes(chunk)

        # Iterators may legitimately yield empty chunks mid-stream
        for chunk in self._iterator:
            if chunk:
                return _as_bytes(chunk)
        return None

    def _finish(self) -> None:
        self._finished = True
        if self._released:
            return
        self._released = True
        close = getattr(self.source, 'close', None)
        if callable(close):
            try:
                close()
            except Exception:
                logger.exception("Failed to release stream source")


def _as_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, bytes):
        return chunk
    if isinstance(chunk, str):
        return chunk.encode('utf-8')
    if isinstance(chunk, (bytearray, memoryview)):
        return bytes(chunk)
    raise TypeError(f"Stream chunks must be bytes or str, got {type(chunk).__name__}")
