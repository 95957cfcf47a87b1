"""
Tests for compression-transparent streams and the line reader.
"""

import gzip
import io

import pytest

from seqstream.errors import FormatError, StreamIOError
from seqstream.io.streams import (
    BUFFER_SIZE,
    LineReader,
    is_compressed,
    open_for_read,
    open_for_write,
)


class TestIsCompressed:
    """Tests for the suffix rule."""

    def test_gz_suffix_is_compressed(self):
        assert is_compressed("reads.fastq.gz")
        assert is_compressed("x.gz")

    def test_other_suffixes_are_plain(self):
        assert not is_compressed("reads.fastq")
        assert not is_compressed("x.out")
        assert not is_compressed("noext")

    def test_suffix_match_is_case_sensitive(self):
        assert not is_compressed("reads.fastq.GZ")
        assert not is_compressed("reads.fastq.Gz")

    def test_only_last_suffix_counts(self):
        assert not is_compressed("reads.gz.fasta")


class TestOpenForWrite:
    """Tests for opening files for writing."""

    def test_plain_output_is_raw_bytes(self, tmp_path):
        path = tmp_path / "x.out"
        with open_for_write(path) as stream:
            stream.write(b">h\nACGT\n")
        assert path.read_bytes() == b">h\nACGT\n"

    def test_gz_output_is_standard_gzip(self, tmp_path):
        path = tmp_path / "x.out.gz"
        with open_for_write(path) as stream:
            stream.write(b">h\nACGT\n")
        assert gzip.decompress(path.read_bytes()) == b">h\nACGT\n"

    def test_large_gz_output_survives_buffering(self, tmp_path):
        path = tmp_path / "big.txt.gz"
        payload = b"ACGT" * (BUFFER_SIZE // 2)
        with open_for_write(path) as stream:
            stream.write(payload)
        assert gzip.decompress(path.read_bytes()) == payload

    def test_missing_directory_raises_stream_error(self, tmp_path):
        path = tmp_path / "missing" / "x.fa"
        with pytest.raises(StreamIOError) as exc_info:
            open_for_write(path)
        assert exc_info.value.path == path
        assert isinstance(exc_info.value.cause, OSError)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_missing_directory_gz_raises_stream_error(self, tmp_path):
        with pytest.raises(StreamIOError):
            open_for_write(tmp_path / "missing" / "x.fa.gz")


class TestOpenForRead:
    """Tests for opening files for reading."""

    def test_plain_read(self, tmp_path):
        path = tmp_path / "x.out"
        path.write_bytes(b"hello\n")
        with open_for_read(path) as stream:
            assert stream.read() == b"hello\n"

    def test_gz_read_of_externally_compressed_file(self, tmp_path):
        path = tmp_path / "x.out.gz"
        path.write_bytes(gzip.compress(b"hello\nworld\n", compresslevel=9))
        with open_for_read(path) as stream:
            assert stream.readline() == b"hello\n"
            assert stream.readline() == b"world\n"

    def test_gz_read_of_multi_member_file(self, tmp_path):
        path = tmp_path / "cat.fa.gz"
        path.write_bytes(gzip.compress(b">a\nAC\n") + gzip.compress(b">b\nGT\n"))
        with open_for_read(path) as stream:
            assert stream.read() == b">a\nAC\n>b\nGT\n"

    def test_missing_file_raises_stream_error(self, tmp_path):
        path = tmp_path / "nope.fa"
        with pytest.raises(StreamIOError) as exc_info:
            open_for_read(path)
        assert exc_info.value.path == path
        assert "nope.fa" in str(exc_info.value)

    def test_missing_gz_file_raises_stream_error(self, tmp_path):
        with pytest.raises(StreamIOError):
            open_for_read(tmp_path / "nope.fa.gz")

    def test_plain_bytes_behind_gz_name_fail_on_read(self, tmp_path):
        path = tmp_path / "fake.fa.gz"
        path.write_bytes(b">h\nACGT\n")
        # Opening succeeds; the mismatch only shows up when reading
        reader = LineReader(open_for_read(path), path=path)
        with pytest.raises(StreamIOError):
            reader.readline()
        reader.close()


class TestLineReader:
    """Tests for line reading with one line of lookahead."""

    def test_readline_strips_terminators(self):
        reader = LineReader(io.BytesIO(b"a\nb\r\nc"))
        assert reader.readline() == "a"
        assert reader.readline() == "b"
        assert reader.readline() == "c"
        assert reader.readline() is None

    def test_peek_does_not_consume(self):
        reader = LineReader(io.BytesIO(b"first\nsecond\n"))
        assert reader.peek() == "first"
        assert reader.peek() == "first"
        assert reader.line_number == 0
        assert reader.readline() == "first"
        assert reader.line_number == 1
        assert reader.peek() == "second"
        assert reader.readline() == "second"
        assert reader.peek() is None
        assert reader.readline() is None
        assert reader.line_number == 2

    def test_blank_line_is_empty_string_not_end(self):
        reader = LineReader(io.BytesIO(b"\nx\n"))
        assert reader.readline() == ""
        assert reader.readline() == "x"
        assert reader.readline() is None

    def test_undecodable_bytes_raise_format_error(self):
        reader = LineReader(io.BytesIO(b"ok\n\xff\xfe\n"))
        assert reader.readline() == "ok"
        with pytest.raises(FormatError) as exc_info:
            reader.readline()
        assert exc_info.value.line_number == 2

    def test_close_is_idempotent_and_releases_stream(self):
        stream = io.BytesIO(b"a\n")
        reader = LineReader(stream)
        reader.close()
        reader.close()
        assert stream.closed
        assert reader.readline() is None

    def test_context_manager_closes(self):
        stream = io.BytesIO(b"a\n")
        with LineReader(stream) as reader:
            assert reader.readline() == "a"
        assert stream.closed
