"""
Contract dispatch.

ResponseDispatcher validates a contract and writes the matching response to
its sink:

    rejected   -> 400 + error envelope
    SMALL      -> 200 + full JSON body
    PAGINATED  -> 200 + {"items": [...], "pagination": {...}}
    STREAMED   -> attachment headers + stream pumped into the sink

Usage:
    sink = FlaskResponseSink()
    ResponseDispatcher(sink).dispatch(contract)
    return sink.to_response()

    # or, closure style
    send(sink)(contract)
"""

import logging
from typing import Any, Callable, Mapping

from ..serializers.response import content_disposition, error_envelope, header_value, paginated_body, small_body
from ..sinks.base import DispatchState, ResponseSink
from ..streams import DEFAULT_CHUNK_SIZE, StreamPump
from .creators import DEFAULT_STREAM_CONTENT_TYPE
from .types import ContractType, ValidationResult, unpack_contract
from .validate import validate_contract

logger = logging.getLogger('response_contracts.dispatch')

CONTRACT_ERROR_STATUS = 400

_HANDLERS = {
    ContractType.SMALL: '_send_small',
    ContractType.PAGINATED: '_send_paginated',
    ContractType.STREAMED: '_send_streamed',
}

_missing = set(ContractType) - set(_HANDLERS)
if _missing:
    raise RuntimeError(f"No dispatch handler for contract types: {sorted(t.value for t in _missing)}")


class ResponseDispatcher:
    """Dispatches one contract into one sink."""

    def __init__(self, sink: ResponseSink, *, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.sink = sink
        self.chunk_size = chunk_size

    def dispatch(self, contract: Any) -> ValidationResult:
        """
        Validate the contract and write it to the sink.

        Invalid contracts never raise: they become a 400 error envelope.
        For streamed contracts this returns as soon as the stream is
        connected; completion and failure are reported to the sink later.

        Returns:
            The ValidationResult
        """
        self.sink.transition(DispatchState.VALIDATING)
        result = validate_contract(contract)

        if not result.ok:
            logger.info(f"Contract rejected: {result.error.value} - {result.message}")
            self.sink.set_status(CONTRACT_ERROR_STATUS)
            self.sink.write_json(error_envelope(result.error.value, result.message))
            self.sink.transition(DispatchState.REJECTED)
            return result

        self.sink.transition(DispatchState.DISPATCHING)
        contract_type, data, metadata = unpack_contract(contract)
        handler = getattr(self, _HANDLERS[contract_type])
        handler(data, metadata)
        return result

    def _send_small(self, data: Any, metadata: Mapping[str, Any]) -> None:
        self.sink.set_status(200)
        self.sink.write_json(small_body(data, metadata))
        self.sink.transition(DispatchState.COMPLETED)

    def _send_paginated(self, data: Any, metadata: Mapping[str, Any]) -> None:
        self.sink.set_status(200)
        self.sink.write_json(paginated_body(data, metadata))
        self.sink.transition(DispatchState.COMPLETED)

    def _send_streamed(self, data: Any, metadata: Mapping[str, Any]) -> None:
        sink = self.sink
        filename = metadata['filename']
        content_type = metadata.get('contentType') or DEFAULT_STREAM_CONTENT_TYPE

        sink.transition(DispatchState.STREAMING)
        pump = StreamPump(
            data,
            chunk_size=self.chunk_size,
            on_end=lambda: sink.transition(DispatchState.COMPLETED),
            on_error=sink.abort,
            on_cancel=sink.cancel,
        )

        # The pump owns the source from here on
        try:
            sink.set_status(200)
            sink.set_header('Content-Disposition', content_disposition(filename))
            sink.set_header('Content-Type', header_value(content_type))
        except Exception as e:
            pump.abort(e)
            raise

        sink.pipe(pump)
        logger.debug(f"Streaming {filename} as {content_type}")


def send(sink: ResponseSink, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Callable[[Any], ValidationResult]:
    """Return a dispatch function bound to sink."""
    return ResponseDispatcher(sink, chunk_size=chunk_size).dispatch
