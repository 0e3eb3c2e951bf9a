"""
Contract package.

Provides contract creators, validation, dispatch and the @contract_response
decorator.
"""

from .types import (
    ContractType,
    ContractError,
    Contract,
    ValidationResult,
    ERROR_MESSAGES,
    unpack_contract,
    is_contract,
)
from .metadata import Clock, utc_now, format_timestamp, merge_metadata
from .creators import (
    DEFAULT_STREAM_CONTENT_TYPE,
    create_small_contract,
    create_paginated_contract,
    create_streamed_contract,
    paginate_sequence,
)
from .validate import validate_contract
from .dispatch import ResponseDispatcher, send
from .params import PaginationParams, parse_pagination
from .wrapper import contract_response, respond, pagination_from_request

__all__ = [
    'ContractType',
    'ContractError',
    'Contract',
    'ValidationResult',
    'ERROR_MESSAGES',
    'unpack_contract',
    'is_contract',
    'Clock',
    'utc_now',
    'format_timestamp',
    'merge_metadata',
    'DEFAULT_STREAM_CONTENT_TYPE',
    'create_small_contract',
    'create_paginated_contract',
    'create_streamed_contract',
    'paginate_sequence',
    'validate_contract',
    'ResponseDispatcher',
    'send',
    'PaginationParams',
    'parse_pagination',
    'contract_response',
    'respond',
    'pagination_from_request',
]
