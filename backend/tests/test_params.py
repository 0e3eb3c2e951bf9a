"""
Pagination param parsing tests.
"""

import pytest
from pydantic import ValidationError
from werkzeug.datastructures import MultiDict

from response_contracts.contracts.params import PaginationParams, parse_pagination
from response_contracts.exceptions import InvalidParamsError


class TestParsePagination:

    def test_defaults(self):
        params = parse_pagination({})
        assert params.page == 1
        assert params.page_size == 20

    def test_camel_case_query_string(self):
        params = parse_pagination(MultiDict({"page": "3", "pageSize": "50"}))
        assert params.page == 3
        assert params.page_size == 50

    def test_snake_case_alias(self):
        assert parse_pagination({"page_size": "15"}).page_size == 15

    def test_blank_values_use_defaults(self):
        params = parse_pagination({"page": "", "pageSize": ""}, default_page_size=30)
        assert params.page == 1
        assert params.page_size == 30

    def test_unrelated_params_ignored(self):
        assert parse_pagination({"district": "D09", "page": "2"}).page == 2

    @pytest.mark.parametrize(
        "args,field",
        [
            ({"page": "0"}, "page"),
            ({"page": "-1"}, "page"),
            ({"page": "two"}, "page"),
            ({"pageSize": "0"}, "pageSize"),
            ({"pageSize": "1.5"}, "pageSize"),
        ],
    )
    def test_invalid_values(self, args, field):
        with pytest.raises(InvalidParamsError) as excinfo:
            parse_pagination(args)
        assert excinfo.value.field == field
        assert excinfo.value.status_code == 400
        assert excinfo.value.code == "INVALID_PARAMS"

    def test_page_size_cap(self):
        with pytest.raises(InvalidParamsError) as excinfo:
            parse_pagination({"pageSize": "101"}, max_page_size=100)
        assert excinfo.value.field == "pageSize"
        assert excinfo.value.received_value == 101


class TestPaginationParams:

    def test_offset_and_limit(self):
        params = PaginationParams(page=3, page_size=25)
        assert params.offset == 50
        assert params.limit == 25

    def test_frozen(self):
        params = PaginationParams()
        with pytest.raises(ValidationError):
            params.page = 2
