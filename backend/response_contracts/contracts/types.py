"""
Core contract types.

A contract describes one response payload in exactly one of three shapes:

    SMALL      -> JSON object or array, written in full
    PAGINATED  -> one page of a collection plus pagination metadata
    STREAMED   -> a readable stream piped to the client as a file download

Contracts are built by the creator functions, checked by validate_contract(),
and consumed once by a ResponseDispatcher.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


class ContractType(Enum):
    """Discriminant of a response contract."""
    SMALL = "small"
    PAGINATED = "paginated"
    STREAMED = "streamed"

    @classmethod
    def coerce(cls, value: Any) -> Optional["ContractType"]:
        """Return the member for a member or its string value, else None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                return None
        return None


class ContractError(str, Enum):
    """Error taxonomy for contract validation and dispatch."""
    INVALID_CONTRACT_TYPE = "InvalidContractType"
    INVALID_SMALL_DATA = "InvalidSmallData"
    INVALID_PAGINATED_DATA = "InvalidPaginatedData"
    MISSING_PAGINATION_METADATA = "MissingPaginationMetadata"
    INVALID_STREAM_DATA = "InvalidStreamData"
    MISSING_FILENAME = "MissingFilename"
    STREAM_ABORTED = "StreamAborted"

    def __str__(self) -> str:
        return self.value


ERROR_MESSAGES = {
    ContractError.INVALID_CONTRACT_TYPE: "Contract type must be one of: small, paginated, streamed",
    ContractError.INVALID_SMALL_DATA: "Small contract data must be a JSON object or array",
    ContractError.INVALID_PAGINATED_DATA: "Paginated contract data must be an array",
    ContractError.MISSING_PAGINATION_METADATA: "Paginated contract requires numeric page, pageSize and total",
    ContractError.INVALID_STREAM_DATA: "Streamed contract data must be a readable stream",
    ContractError.MISSING_FILENAME: "Streamed contract requires a non-empty filename",
    ContractError.STREAM_ABORTED: "Stream failed during transfer",
}


@dataclass(frozen=True)
class Contract:
    """
    A response payload tagged with its shape.

    metadata is a read-only mapping: all merging happens in the creators,
    never after construction.
    """
    type: ContractType
    data: Any
    metadata: Mapping[str, Any]

    def __post_init__(self):
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_contract(): the untouched contract, or one error code."""
    ok: bool
    contract: Any = None
    error: Optional[ContractError] = None

    @classmethod
    def success(cls, contract: Any) -> "ValidationResult":
        return cls(ok=True, contract=contract)

    @classmethod
    def failure(cls, error: ContractError) -> "ValidationResult":
        return cls(ok=False, error=error)

    @property
    def message(self) -> Optional[str]:
        if self.error is None:
            return None
        return ERROR_MESSAGES[self.error]


def unpack_contract(contract: Any) -> Tuple[Optional[ContractType], Any, Mapping[str, Any]]:
    """
    Read (type, data, metadata) from a Contract or a contract mapping.

    Accepts the dataclass or the wire form {"type", "data", "metadata"}.
    Anything else unpacks to (None, None, {}). Metadata that is not a
    mapping unpacks as empty.
    """
    if isinstance(contract, Contract):
        raw_type, data, metadata = contract.type, contract.data, contract.metadata
    elif isinstance(contract, Mapping):
        raw_type = contract.get("type")
        data = contract.get("data")
        metadata = contract.get("metadata")
    else:
        return None, None, {}

    if not isinstance(metadata, Mapping):
        metadata = {}
    return ContractType.coerce(raw_type), data, metadata


def is_contract(value: Any) -> bool:
    """True if value looks like a contract (whether or not it is valid)."""
    if isinstance(value, Contract):
        return True
    return isinstance(value, Mapping) and "type" in value and "data" in value
