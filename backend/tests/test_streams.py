"""
Stream pump tests.

The pump must release its source exactly once whether the transfer ends
normally, fails, or is cancelled by the consumer.
"""

import io
import logging

import pytest

from response_contracts.exceptions import StreamAborted
from response_contracts.streams import StreamPump, is_readable_stream


class TestIsReadableStream:

    @pytest.mark.parametrize(
        "value",
        [
            io.BytesIO(b"abc"),
            io.StringIO("abc"),
            iter([b"a"]),
            (chunk for chunk in [b"a"]),
        ],
    )
    def test_streams(self, value):
        assert is_readable_stream(value) is True

    @pytest.mark.parametrize("value", [None, b"abc", "abc", [b"a"], (b"a",), {"a": 1}, 42, bytearray(b"a")])
    def test_payloads_are_not_streams(self, value):
        assert is_readable_stream(value) is False


class TestStreamPump:

    def test_reads_file_like_in_chunks(self):
        source = io.BytesIO(b"x" * 10)
        pump = StreamPump(source, chunk_size=4)

        assert [len(chunk) for chunk in pump] == [4, 4, 2]
        assert pump.bytes_sent == 10
        assert source.closed is True

    def test_iterator_chunks_are_encoded_and_empty_chunks_skipped(self):
        pump = StreamPump(iter(["héllo", b"", bytearray(b" world")]))
        assert list(pump) == ["héllo".encode("utf-8"), b" world"]

    def test_abort_before_transfer_releases_and_reports(self, make_stream):
        errors = []
        failure = ValueError("headers rejected")
        stream = make_stream([b"a"])
        pump = StreamPump(stream, on_error=errors.append)

        pump.abort(failure)
        pump.abort(failure)
        pump.close()

        assert errors == [failure]
        assert stream.reads == 0
        assert stream.close_calls == 1
        assert list(pump) == []

    def test_end_releases_once_and_reports_completion(self, make_stream):
        ended = []
        stream = make_stream([b"a", b"b"])
        pump = StreamPump(stream, on_end=lambda: ended.append(True))

        assert b"".join(pump) == b"ab"
        pump.close()

        assert ended == [True]
        assert stream.close_calls == 1
        assert pump.released is True

    def test_source_error_aborts_once(self, make_stream):
        errors = []
        failure = IOError("disk gone")
        stream = make_stream([b"a", b"b"], fail_after=1, error=failure)
        pump = StreamPump(stream, on_error=errors.append)

        assert next(pump) == b"a"
        with pytest.raises(StreamAborted) as excinfo:
            next(pump)
        pump.close()

        assert excinfo.value.__cause__ is failure
        assert excinfo.value.details == {"bytesSent": 1}
        assert errors == [failure]
        assert stream.close_calls == 1

    def test_iteration_stops_after_abort(self, make_stream):
        pump = StreamPump(make_stream([b"a"], fail_after=0))
        with pytest.raises(StreamAborted):
            next(pump)
        assert list(pump) == []

    def test_source_error_is_logged(self, make_stream, caplog):
        pump = StreamPump(make_stream([], fail_after=0))
        with caplog.at_level(logging.ERROR, logger="response_contracts.streams"):
            with pytest.raises(StreamAborted):
                list(pump)
        assert any("Stream source failed" in record.getMessage() for record in caplog.records)

    def test_cancel_before_first_read_releases_source(self, make_stream):
        cancelled = []
        stream = make_stream([b"a"])
        pump = StreamPump(stream, on_cancel=lambda: cancelled.append(True))

        pump.close()
        pump.close()

        assert cancelled == [True]
        assert stream.close_calls == 1
        assert stream.reads == 0
        assert list(pump) == []

    def test_cancel_mid_transfer_closes_generator_source(self):
        cleaned_up = []

        def produce():
            try:
                yield b"a"
                yield b"b"
            finally:
                cleaned_up.append(True)

        pump = StreamPump(produce())
        assert next(pump) == b"a"
        pump.close()

        assert cleaned_up == [True]

    def test_bad_chunk_type_aborts(self):
        pump = StreamPump(iter([42]))
        with pytest.raises(StreamAborted) as excinfo:
            next(pump)
        assert isinstance(excinfo.value.__cause__, TypeError)

    def test_failing_close_is_logged_not_raised(self, caplog):
        class BrokenClose(io.BytesIO):
            attempts = 0

            def close(self):
                self.attempts += 1
                if self.attempts == 1:
                    raise OSError("close failed")
                super().close()

        pump = StreamPump(BrokenClose(b"abc"))
        with caplog.at_level(logging.ERROR, logger="response_contracts.streams"):
            assert b"".join(pump) == b"abc"
        assert any("Failed to release stream source" in record.getMessage() for record in caplog.records)

    @pytest.mark.parametrize("chunk_size", [0, -1])
    def test_chunk_size_must_be_positive(self, chunk_size):
        with pytest.raises(ValueError):
            StreamPump(io.BytesIO(b""), chunk_size=chunk_size)
