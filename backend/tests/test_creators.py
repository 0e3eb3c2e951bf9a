"""
Contract Creator Tests

Creators only assemble contracts. These tests pin:
1. The type tag and the data reference
2. Metadata contents per type (timestamp, pagination, filename/contentType)
3. Pagination arithmetic (totalPages, hasNext, hasPrevious)
4. That creators never validate or read streams
"""

import dataclasses

import pytest

from response_contracts.contracts import (
    ContractType,
    DEFAULT_STREAM_CONTENT_TYPE,
    create_paginated_contract,
    create_small_contract,
    create_streamed_contract,
    paginate_sequence,
)


# =============================================================================
# SMALL
# =============================================================================

class TestSmallContract:

    def test_shape(self, fixed_clock, fixed_timestamp):
        data = {"a": 1}
        contract = create_small_contract(data, clock=fixed_clock)

        assert contract.type is ContractType.SMALL
        assert contract.data is data
        assert dict(contract.metadata) == {"timestamp": fixed_timestamp}

    def test_custom_metadata(self, fixed_clock):
        contract = create_small_contract([1, 2], metadata={"source": "cache"}, clock=fixed_clock)
        assert contract.metadata["source"] == "cache"

    @pytest.mark.parametrize("data", [42, "text", None, 3.5])
    def test_primitives_do_not_raise(self, data):
        """Shape checks belong to the validator, not the creator."""
        contract = create_small_contract(data)
        assert contract.data == data

    def test_contract_is_immutable(self):
        contract = create_small_contract({"a": 1})
        with pytest.raises(dataclasses.FrozenInstanceError):
            contract.type = ContractType.STREAMED
        with pytest.raises(TypeError):
            contract.metadata["timestamp"] = "tampered"


# =============================================================================
# PAGINATED
# =============================================================================

class TestPaginatedContract:

    @pytest.mark.parametrize(
        "page,page_size,total,total_pages,has_next,has_previous",
        [
            (1, 10, 25, 3, True, False),
            (2, 10, 25, 3, True, True),
            (3, 10, 25, 3, False, True),
            (1, 10, 10, 1, False, False),
            (1, 10, 0, 0, False, False),
            (4, 10, 25, 3, False, True),
            (1, 1, 7, 7, True, False),
            (1, 3, 10, 4, True, False),
            (4, 3, 10, 4, False, True),
            (1, 10, 10**20, 10**19, True, False),
            (10**19, 10, 10**20, 10**19, False, True),
            (1, 10, 10**400, 10**399, True, False),
            (2, 2.5, 10, 4, True, True),
        ],
    )
    def test_derived_fields(self, page, page_size, total, total_pages, has_next, has_previous):
        contract = create_paginated_contract([], page, page_size, total)

        assert contract.metadata["page"] == page
        assert contract.metadata["pageSize"] == page_size
        assert contract.metadata["total"] == total
        assert contract.metadata["totalPages"] == total_pages
        assert contract.metadata["hasNext"] is has_next
        assert contract.metadata["hasPrevious"] is has_previous

    def test_shape(self, fixed_clock, fixed_timestamp):
        contract = create_paginated_contract([1, 2], 1, 10, 25, clock=fixed_clock)

        assert contract.type is ContractType.PAGINATED
        assert contract.data == [1, 2]
        assert contract.metadata["timestamp"] == fixed_timestamp

    def test_no_bounds_checks_at_creation(self):
        contract = create_paginated_contract([], 0, 10, 25)
        assert contract.metadata["page"] == 0
        assert contract.metadata["hasPrevious"] is False

    def test_zero_page_size_gives_zero_pages(self):
        contract = create_paginated_contract([], 1, 0, 25)
        assert contract.metadata["totalPages"] == 0
        assert contract.metadata["hasNext"] is False

    def test_non_numeric_inputs_skip_derived_fields(self):
        contract = create_paginated_contract([], "1", 10, 25)
        assert contract.metadata["page"] == "1"
        assert "totalPages" not in contract.metadata
        assert "hasNext" not in contract.metadata

    def test_derived_fields_cannot_be_overridden(self):
        contract = create_paginated_contract(
            [],
            1,
            10,
            25,
            metadata={"totalPages": 99, "hasNext": False, "page": 7, "query": "d09"},
        )
        assert contract.metadata["totalPages"] == 3
        assert contract.metadata["hasNext"] is True
        assert contract.metadata["page"] == 1
        assert contract.metadata["query"] == "d09"


class TestPaginateSequence:

    def test_slices_requested_page(self):
        contract = paginate_sequence(list(range(25)), page=3, page_size=10)

        assert contract.data == [20, 21, 22, 23, 24]
        assert contract.metadata["total"] == 25
        assert contract.metadata["totalPages"] == 3
        assert contract.metadata["hasNext"] is False

    def test_page_past_end_is_empty(self):
        contract = paginate_sequence(list(range(5)), page=4, page_size=10)
        assert contract.data == []
        assert contract.metadata["total"] == 5

    def test_tuple_input(self):
        contract = paginate_sequence(("a", "b", "c"), page=1, page_size=2)
        assert contract.data == ["a", "b"]
        assert contract.metadata["hasNext"] is True


# =============================================================================
# STREAMED
# =============================================================================

class TestStreamedContract:

    def test_default_content_type(self, make_stream):
        contract = create_streamed_contract(make_stream([b"x"]), "report.csv")

        assert contract.type is ContractType.STREAMED
        assert contract.metadata["filename"] == "report.csv"
        assert contract.metadata["contentType"] == DEFAULT_STREAM_CONTENT_TYPE == "application/octet-stream"

    def test_explicit_content_type(self, make_stream):
        contract = create_streamed_contract(make_stream([]), "report.csv", "text/csv")
        assert contract.metadata["contentType"] == "text/csv"

    def test_stream_stored_by_reference_and_not_read(self, make_stream):
        stream = make_stream([b"a", b"b"])
        contract = create_streamed_contract(stream, "report.csv")

        assert contract.data is stream
        assert stream.reads == 0
        assert stream.close_calls == 0

    def test_custom_metadata_cannot_replace_filename(self, make_stream):
        contract = create_streamed_contract(
            make_stream([]),
            "report.csv",
            metadata={"filename": "other.bin", "rows": 10},
        )
        assert contract.metadata["filename"] == "report.csv"
        assert contract.metadata["rows"] == 10
