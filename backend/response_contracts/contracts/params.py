"""
Pagination query params.

Key features:
- frozen=True: Immutable after parsing
- populate_by_name=True: Accept both pageSize and page_size
- extra='ignore': Other query params are left to the view
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import InvalidParamsError

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 500


class PaginationParams(BaseModel):
    """Page selection parsed from a request."""
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        extra='ignore',
    )

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        alias='pageSize',
        description="Items per page",
    )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def parse_pagination(
    args: Mapping[str, Any],
    *,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> PaginationParams:
    """
    Parse page/pageSize from query args.

    Empty values fall back to defaults. Both "pageSize" and "page_size"
    are accepted.

    Args:
        args: request.args or any mapping
        default_page_size: Used when no page size is given
        max_page_size: Upper bound for page size

    Raises:
        InvalidParamsError: If a value is not a positive integer or
            page size exceeds max_page_size
    """
    raw = {key: value for key, value in args.items() if value not in (None, '')}
    snake_size = raw.pop('page_size', None)
    raw.setdefault('pageSize', snake_size if snake_size is not None else default_page_size)

    try:
        params = PaginationParams.model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first['loc'][0]) if first.get('loc') else None
        raise InvalidParamsError(
            f"Invalid pagination parameter: {first['msg']}",
            field=field,
            received_value=first.get('input'),
        ) from e

    if params.page_size > max_page_size:
        raise InvalidParamsError(
            f"pageSize must be at most {max_page_size}",
            field='pageSize',
            received_value=params.page_size,
        )
    return params
