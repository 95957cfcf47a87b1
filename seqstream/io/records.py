"""
Record iteration and writing over owned streams.

RecordIterator drives a codec over a stream until the stream is
exhausted or a record fails to parse. RecordWriter pushes records
through a codec's serializer.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Optional, Union

from seqstream.errors import SeqStreamError, StreamIOError
from seqstream.io.streams import LineReader

logger = logging.getLogger(__name__)


class IteratorState(Enum):
    """Lifecycle of a RecordIterator."""
    ACTIVE = "active"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class RecordIterator:
    """
    Lazy, single-pass iterator of records from one stream.

    The iterator owns the stream and closes it as soon as it reaches a
    terminal state. Once exhausted it keeps raising StopIteration; once
    failed it keeps re-raising the error that stopped it. A malformed
    record is never skipped.

    Attributes:
        state: Current IteratorState
        error: The error that moved the iterator to FAILED, if any
        records_read: Number of records produced so far

    Example:
        >>> with RecordIterator(open_for_read("a.fa"), FastaCodec()) as records:
        ...     headers = [r.header for r in records]
    """

    def __init__(self, stream: BinaryIO, codec: Any, path: Optional[Union[str, Path]] = None):
        self._reader = LineReader(stream, path=path)
        self.codec = codec
        self.path = path
        self.state = IteratorState.ACTIVE
        self.error: Optional[SeqStreamError] = None
        self.records_read = 0

    @property
    def line_number(self) -> int:
        """Number of input lines consumed so far."""
        return self._reader.line_number

    def __iter__(self) -> "RecordIterator":
        return self

    def __next__(self):
        if self.state is IteratorState.FAILED:
            raise self.error
        if self.state is IteratorState.EXHAUSTED:
            raise StopIteration

        try:
            record = self.codec.parse_next(self._reader)
        except SeqStreamError as exc:
            self._finish(IteratorState.FAILED, exc)
            raise

        if record is None:
            self._finish(IteratorState.EXHAUSTED)
            raise StopIteration

        self.records_read += 1
        return record

    def _finish(self, state: IteratorState, error: Optional[SeqStreamError] = None) -> None:
        self.state = state
        self.error = error
        logger.debug(
            "%s %s after %d records (line %d)",
            self.path or "<stream>", state.value, self.records_read, self.line_number
        )
        try:
            self._reader.close()
        except StreamIOError as exc:
            if error is None:
                self.state = IteratorState.FAILED
                self.error = exc
                raise
            logger.debug("Ignoring close failure after %s: %s", error, exc)

    def close(self) -> None:
        """Release the stream. Further pulls report exhaustion."""
        if self.state is IteratorState.ACTIVE:
            self._finish(IteratorState.EXHAUSTED)

    def __enter__(self) -> "RecordIterator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class RecordWriter:
    """
    Writes records through a codec to a stream it owns.

    Use it as a context manager so the stream (and, for gzip output,
    the compressed trailer) is finished on every exit path.

    Attributes:
        records_written: Number of records written so far
    """

    def __init__(self, stream: BinaryIO, codec: Any, path: Optional[Union[str, Path]] = None):
        self._stream = stream
        self.codec = codec
        self.path = path
        self.records_written = 0
        self.closed = False

    def write(self, record) -> None:
        """Serialize one record."""
        if self.closed:
            raise ValueError("write to a closed RecordWriter")
        try:
            self.codec.serialize(record, self._stream)
        except OSError as exc:
            raise StreamIOError("write failed", path=self.path, cause=exc) from exc
        self.records_written += 1

    def write_all(self, records: Iterable) -> int:
        """Serialize every record of an iterable; returns how many were written."""
        count = 0
        for record in records:
            self.write(record)
            count += 1
        return count

    def close(self) -> None:
        """Flush and release the stream. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        try:
            self._stream.close()
        except OSError as exc:
            raise StreamIOError("close failed", path=self.path, cause=exc) from exc
        logger.debug("Closed %s after %d records", self.path or "<stream>", self.records_written)

    def __enter__(self) -> "RecordWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
