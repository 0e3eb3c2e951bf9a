"""
Contract validation.

validate_contract() checks that a contract's data and metadata match its
declared type:

    SMALL      data is a JSON object or array
    PAGINATED  data is an array; page, pageSize, total are numeric
    STREAMED   data is a readable stream; filename is non-empty

It is total: every input, including None or arbitrary objects, gives exactly
one ValidationResult. It never raises and never does I/O.

page >= 1 is deliberately not checked here; see DESIGN.md.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from ..streams import is_readable_stream
from .creators import is_numeric
from .types import ContractError, ContractType, ValidationResult, unpack_contract

logger = logging.getLogger('response_contracts.validate')

PAGINATION_KEYS = ('page', 'pageSize', 'total')


def _is_json_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _check_small(data: Any, metadata: Mapping) -> Optional[ContractError]:
    if isinstance(data, Mapping) or _is_json_array(data):
        return None
    return ContractError.INVALID_SMALL_DATA


def _check_paginated(data: Any, metadata: Mapping) -> Optional[ContractError]:
    if not _is_json_array(data):
        return ContractError.INVALID_PAGINATED_DATA
    if not all(is_numeric(metadata.get(key)) for key in PAGINATION_KEYS):
        return ContractError.MISSING_PAGINATION_METADATA
    return None


def _check_streamed(data: Any, metadata: Mapping) -> Optional[ContractError]:
    if not is_readable_stream(data):
        return ContractError.INVALID_STREAM_DATA
    filename = metadata.get('filename')
    if not isinstance(filename, str) or not filename.strip():
        return ContractError.MISSING_FILENAME
    return None


_CHECKS: Dict[ContractType, Callable[[Any, Mapping], Optional[ContractError]]] = {
    ContractType.SMALL: _check_small,
    ContractType.PAGINATED: _check_paginated,
    ContractType.STREAMED: _check_streamed,
}

_missing = set(ContractType) - set(_CHECKS)
if _missing:
    raise RuntimeError(f"No validator registered for contract types: {sorted(t.value for t in _missing)}")


def validate_contract(contract: Any) -> ValidationResult:
    """
    Validate a contract against its declared type.

    Args:
        contract: A Contract, a contract mapping, or anything else

    Returns:
        ValidationResult.success(contract) with the contract untouched, or
        ValidationResult.failure(error) with one ContractError
    """
    contract_type, data, metadata = unpack_contract(contract)
    if contract_type is None:
        error = ContractError.INVALID_CONTRACT_TYPE
    else:
        error = _CHECKS[contract_type](data, metadata)

    if error is not None:
        logger.debug(f"Contract rejected: {error.value}")
        return ValidationResult.failure(error)
    return ValidationResult.success(contract)
