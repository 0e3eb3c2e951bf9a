"""
Response contracts - shape, validate and dispatch HTTP response payloads.

This package provides:
- Contract creators for small, paginated and streamed payloads
- Contract validation returning a ValidationResult (never raises)
- ResponseDispatcher writing contracts to a response sink
- @contract_response decorator for Flask views
- Global middleware (request_id, error_envelope, request_logging)
"""

from .contracts import (
    ContractType,
    ContractError,
    Contract,
    ValidationResult,
    create_small_contract,
    create_paginated_contract,
    create_streamed_contract,
    paginate_sequence,
    merge_metadata,
    validate_contract,
    ResponseDispatcher,
    send,
    parse_pagination,
    contract_response,
    respond,
    pagination_from_request,
)
from .sinks import DispatchState, FlaskResponseSink, RecordingSink

__all__ = [
    'ContractType',
    'ContractError',
    'Contract',
    'ValidationResult',
    'create_small_contract',
    'create_paginated_contract',
    'create_streamed_contract',
    'paginate_sequence',
    'merge_metadata',
    'validate_contract',
    'ResponseDispatcher',
    'send',
    'parse_pagination',
    'contract_response',
    'respond',
    'pagination_from_request',
    'DispatchState',
    'FlaskResponseSink',
    'RecordingSink',
]
