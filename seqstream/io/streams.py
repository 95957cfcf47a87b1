"""
Compression-transparent byte streams.

Files whose name ends in ".gz" are read through a gzip decompressor and
written through a gzip compressor; every other name is treated as plain
bytes. The decision is made from the file name alone, the contents are
never inspected at open time.
"""

import gzip
import io
import logging
import zlib
from pathlib import Path
from typing import BinaryIO, Optional, Union

from seqstream.errors import FormatError, StreamIOError

logger = logging.getLogger(__name__)

# Buffer between the raw (or gzip) file and the caller
BUFFER_SIZE = 128 * 1024

# zlib's default level; not exposed as a parameter
COMPRESSION_LEVEL = 6

GZIP_SUFFIX = ".gz"

ENCODING = "utf-8"

# Decoder failures reported by a corrupt or misnamed gzip stream
_READ_ERRORS = (OSError, EOFError, zlib.error)


def has_line_break(text: str) -> bool:
    """Check whether text contains a character that would end a line."""
    return "\n" in text or "\r" in text


def is_compressed(filepath: Union[str, Path]) -> bool:
    """
    Check whether a path selects the gzip framing.

    Only the last suffix counts and the comparison is case-sensitive,
    so "reads.fq.gz" is compressed while "reads.fq.GZ" and
    "reads.gz.fq" are not.
    """
    return Path(filepath).suffix == GZIP_SUFFIX


def open_for_read(filepath: Union[str, Path]) -> BinaryIO:
    """
    Open a file for buffered binary reading, decompressing if needed.

    Args:
        filepath: Path to the file; a ".gz" suffix selects gzip

    Returns:
        A readable binary stream owned by the caller

    Raises:
        StreamIOError: If the file cannot be opened

    Example:
        >>> with open_for_read("reads.fastq.gz") as stream:
        ...     first = stream.readline()
    """
    filepath = Path(filepath)
    try:
        if is_compressed(filepath):
            stream = io.BufferedReader(
                gzip.GzipFile(filename=str(filepath), mode="rb"),
                buffer_size=BUFFER_SIZE
            )
        else:
            stream = open(filepath, "rb", buffering=BUFFER_SIZE)
    except OSError as exc:
        raise StreamIOError("cannot open for reading", path=filepath, cause=exc) from exc

    logger.debug("Opened %s for reading (compressed=%s)", filepath, is_compressed(filepath))
    return stream


def open_for_write(filepath: Union[str, Path]) -> BinaryIO:
    """
    Create (or truncate) a file for buffered binary writing.

    Output to a ".gz" path is gzip-compressed at COMPRESSION_LEVEL. The
    gzip trailer is only written when the returned stream is closed.

    Args:
        filepath: Path to the file; a ".gz" suffix selects gzip

    Returns:
        A writable binary stream owned by the caller

    Raises:
        StreamIOError: If the file cannot be created
    """
    filepath = Path(filepath)
    try:
        if is_compressed(filepath):
            stream = io.BufferedWriter(
                gzip.GzipFile(filename=str(filepath), mode="wb", compresslevel=COMPRESSION_LEVEL),
                buffer_size=BUFFER_SIZE
            )
        else:
            stream = open(filepath, "wb", buffering=BUFFER_SIZE)
    except OSError as exc:
        raise StreamIOError("cannot open for writing", path=filepath, cause=exc) from exc

    logger.debug("Opened %s for writing (compressed=%s)", filepath, is_compressed(filepath))
    return stream


class LineReader:
    """
    Line-oriented view of a binary stream with one line of lookahead.

    Lines are returned decoded and without their terminator ("\\n" or
    "\\r\\n"). ``peek`` fills a single slot instead of seeking back, so
    the reader works on gzip streams that cannot rewind.

    Attributes:
        path: File the stream was opened from, used in error messages
        line_number: Number of the last line returned by ``readline``
    """

    def __init__(self, stream: BinaryIO, path: Optional[Union[str, Path]] = None):
        self._stream = stream
        self._peeked: Optional[str] = None
        self._has_peeked = False
        self.path = path
        self.line_number = 0
        self.closed = False

    def _read_line(self) -> Optional[str]:
        if self.closed:
            return None
        try:
            raw = self._stream.readline()
        except _READ_ERRORS as exc:
            raise StreamIOError("read failed", path=self.path, cause=exc) from exc
        if not raw:
            return None

        if raw.endswith(b"\n"):
            raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]
        try:
            return raw.decode(ENCODING)
        except UnicodeDecodeError as exc:
            raise FormatError(
                f"Undecodable bytes in input: {exc.reason}",
                line_number=self.line_number + 1
            ) from exc

    def peek(self) -> Optional[str]:
        """Return the next line without consuming it (None at end of stream)."""
        if not self._has_peeked:
            self._peeked = self._read_line()
            self._has_peeked = True
        return self._peeked

    def readline(self) -> Optional[str]:
        """Consume and return the next line (None at end of stream)."""
        if self._has_peeked:
            line = self._peeked
            self._peeked = None
            self._has_peeked = False
        else:
            line = self._read_line()
        if line is not None:
            self.line_number += 1
        return line

    def close(self) -> None:
        """Release the underlying stream. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        self._peeked = None
        self._has_peeked = False
        try:
            self._stream.close()
        except _READ_ERRORS as exc:
            raise StreamIOError("close failed", path=self.path, cause=exc) from exc
        logger.debug("Closed %s after %d lines", self.path or "<stream>", self.line_number)

    def __enter__(self) -> "LineReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
