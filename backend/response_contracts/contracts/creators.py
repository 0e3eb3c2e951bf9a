"""
Contract creators.

Pure functions that assemble one of the three contract shapes. They do not
validate: a contract built from a bad payload is rejected later by
validate_contract(), which keeps every shape decision in one place.

Usage:
    create_small_contract({"status": "ok"})
    create_paginated_contract(rows, page=2, page_size=50, total=730)
    create_streamed_contract(open(path, "rb"), "report.csv", "text/csv")
"""

import math
from numbers import Integral, Real
from typing import Any, Dict, Mapping, Optional, Sequence

from .metadata import Clock, merge_metadata
from .types import Contract, ContractType

DEFAULT_STREAM_CONTENT_TYPE = 'application/octet-stream'


def is_numeric(value: Any) -> bool:
    """Real, finite and not a bool."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    if isinstance(value, Integral):
        return True
    try:
        return math.isfinite(value)
    except OverflowError:
        # Rationals too large for a float are still finite
        return True


def pagination_fields(page: Any, page_size: Any, total: Any) -> Dict[str, Any]:
    """
    Build pagination metadata, deriving totalPages/hasNext/hasPrevious.

    Derived fields are only present when all three inputs are numeric.
    A non-positive page_size gives zero pages.

    Examples:
        (1, 10, 25) -> totalPages=3, hasNext=True, hasPrevious=False
        (3, 10, 25) -> totalPages=3, hasNext=False, hasPrevious=True
    """
    fields = {
        'page': page,
        'pageSize': page_size,
        'total': total,
    }
    if not (is_numeric(page) and is_numeric(page_size) and is_numeric(total)):
        return fields

    if page_size <= 0:
        total_pages = 0
    elif isinstance(total, Integral) and isinstance(page_size, Integral):
        total_pages = -(-total // page_size)
    else:
        total_pages = math.ceil(total / page_size)
    fields.update({
        'totalPages': total_pages,
        'hasNext': page < total_pages,
        'hasPrevious': page > 1,
    })
    return fields


def create_small_contract(
    data: Any,
    *,
    metadata: Optional[Mapping[str, Any]] = None,
    clock: Optional[Clock] = None,
) -> Contract:
    """
    Create a contract for a small JSON payload written in full.

    Args:
        data: JSON object (mapping) or array (list/tuple)
        metadata: Optional extra metadata
        clock: Optional clock for the timestamp
    """
    return Contract(
        type=ContractType.SMALL,
        data=data,
        metadata=merge_metadata({}, metadata, clock=clock),
    )


def create_paginated_contract(
    data: Any,
    page: Any,
    page_size: Any,
    total: Any,
    *,
    metadata: Optional[Mapping[str, Any]] = None,
    clock: Optional[Clock] = None,
) -> Contract:
    """
    Create a contract for one page of a collection.

    Bounds are not checked here (page may be 0 or negative).

    Args:
        data: Items on this page
        page: Current page number (1-indexed)
        page_size: Items per page
        total: Total items across all pages
        metadata: Optional extra metadata; cannot override pagination fields
        clock: Optional clock for the timestamp
    """
    return Contract(
        type=ContractType.PAGINATED,
        data=data,
        metadata=merge_metadata(pagination_fields(page, page_size, total), metadata, clock=clock),
    )


def create_streamed_contract(
    stream: Any,
    filename: Any,
    content_type: Optional[str] = None,
    *,
    metadata: Optional[Mapping[str, Any]] = None,
    clock: Optional[Clock] = None,
) -> Contract:
    """
    Create a contract for a file download piped from a readable stream.

    The stream is stored by reference and never read here, so memory use
    does not depend on payload size.

    Args:
        stream: Binary file-like object or iterator of byte chunks
        filename: Download filename for Content-Disposition
        content_type: MIME type, defaults to application/octet-stream
        metadata: Optional extra metadata
        clock: Optional clock for the timestamp
    """
    required = {
        'filename': filename,
        'contentType': content_type or DEFAULT_STREAM_CONTENT_TYPE,
    }
    return Contract(
        type=ContractType.STREAMED,
        data=stream,
        metadata=merge_metadata(required, metadata, clock=clock),
    )


def paginate_sequence(
    items: Sequence[Any],
    page: int,
    page_size: int,
    *,
    metadata: Optional[Mapping[str, Any]] = None,
    clock: Optional[Clock] = None,
) -> Contract:
    """
    Slice a full in-memory collection and wrap the requested page.

    Pages past the end yield an empty page with the real total.
    """
    window = []
    if page_size > 0:
        start = max(page - 1, 0) * page_size
        window = list(items[start:start + page_size])
    return create_paginated_contract(
        window,
        page,
        page_size,
        len(items),
        metadata=metadata,
        clock=clock,
    )
