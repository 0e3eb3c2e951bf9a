"""
Contract metadata helpers.

Every contract carries a creation timestamp. Time comes from an injectable
clock so contract creation stays deterministic under test.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

logger = logging.getLogger('response_contracts.metadata')

Clock = Callable[[], datetime]

TIMESTAMP_KEY = 'timestamp'


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """
    Render an instant as ISO-8601 UTC with millisecond precision.

    Naive datetimes are taken to be UTC.

    Examples:
        datetime(2025, 1, 1, tzinfo=timezone.utc) -> "2025-01-01T00:00:00.000Z"
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def merge_metadata(
    required: Mapping[str, Any],
    custom: Optional[Mapping[str, Any]] = None,
    *,
    clock: Optional[Clock] = None,
) -> Dict[str, Any]:
    """
    Build contract metadata from required fields and caller overrides.

    Required fields win on key collisions so callers cannot overwrite the
    fields a contract type depends on. A timestamp is added from the clock
    unless one of the inputs already has it. Neither input is mutated.

    Args:
        required: Fields the contract type needs (page, filename, ...)
        custom: Optional caller-supplied extras
        clock: Optional clock, defaults to utc_now

    Returns:
        New metadata dict

    Raises:
        TypeError: If custom is not a mapping
    """
    if custom is not None and not isinstance(custom, Mapping):
        raise TypeError(f"custom metadata must be a mapping, got {type(custom).__name__}")

    merged = dict(custom or {})

    collisions = sorted(key for key in required if key in merged)
    if collisions:
        logger.debug(f"Ignoring custom metadata for required fields: {collisions}")

    merged.update(required)

    if TIMESTAMP_KEY not in merged:
        merged[TIMESTAMP_KEY] = format_timestamp((clock or utc_now)())

    return merged
