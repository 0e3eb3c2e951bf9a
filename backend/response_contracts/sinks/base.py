"""
Output sink interface and dispatch state machine.

A sink is where a dispatched contract lands: it takes a status, headers and
either a JSON body or a stream pump. Each sink serves exactly one dispatch
and tracks where that dispatch is:

    RECEIVED -> VALIDATING -> REJECTED
                           -> DISPATCHING -> COMPLETED
                                          -> STREAMING -> COMPLETED
                                                       -> ABORTED

REJECTED, COMPLETED and ABORTED are terminal.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import InvalidStateTransition
from ..streams import StreamPump

logger = logging.getLogger('response_contracts.sinks')


class DispatchState(Enum):
    RECEIVED = "received"
    VALIDATING = "validating"
    REJECTED = "rejected"
    DISPATCHING = "dispatching"
    STREAMING = "streaming"
    COMPLETED = "completed"
    ABORTED = "aborted"


TERMINAL_STATES = frozenset({
    DispatchState.REJECTED,
    DispatchState.COMPLETED,
    DispatchState.ABORTED,
})

_TRANSITIONS = {
    DispatchState.RECEIVED: {DispatchState.VALIDATING},
    DispatchState.VALIDATING: {DispatchState.REJECTED, DispatchState.DISPATCHING},
    DispatchState.DISPATCHING: {DispatchState.COMPLETED, DispatchState.STREAMING},
    DispatchState.STREAMING: {DispatchState.COMPLETED, DispatchState.ABORTED},
}


class ResponseSink(ABC):
    """
    Base class for response sinks.

    Subclasses implement the four write operations. State tracking, abort
    and cancel handling live here.
    """

    def __init__(self):
        self.state = DispatchState.RECEIVED
        self.error: Optional[BaseException] = None

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def transition(self, state: DispatchState) -> None:
        """Move to the next dispatch state; there is no way back."""
        if state not in _TRANSITIONS.get(self.state, ()):
            raise InvalidStateTransition(
                f"Cannot move sink from {self.state.value} to {state.value}",
                details={"from": self.state.value, "to": state.value},
            )
        self.state = state

    @abstractmethod
    def set_status(self, status_code: int) -> None:
        ...

    @abstractmethod
    def set_header(self, name: str, value: str) -> None:
        ...

    @abstractmethod
    def write_json(self, body: Dict[str, Any]) -> None:
        """Write a complete JSON-serializable body."""

    @abstractmethod
    def pipe(self, pump: StreamPump) -> None:
        """Connect a stream pump to the sink's output. Must not read from it."""

    def abort(self, error: BaseException) -> None:
        """Record a transport failure while streaming."""
        self.error = error
        self.transition(DispatchState.ABORTED)
        self._on_abort(error)

    def cancel(self) -> None:
        """Record that the consumer went away before the stream ended."""
        self.transition(DispatchState.ABORTED)
        self._on_cancel()

    def _on_abort(self, error: BaseException) -> None:
        logger.error(f"Response aborted: {error}")

    def _on_cancel(self) -> None:
        logger.warning("Response cancelled by consumer")
