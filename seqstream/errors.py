"""
Exceptions raised by seqstream.

StreamIOError covers failures at the operating-system boundary (open,
create, read, write, decompress). FormatError and its subclasses cover
content that does not match the record grammar.
"""

from pathlib import Path
from typing import Optional, Union


class SeqStreamError(Exception):
    """Base class for all seqstream errors."""
    pass


class StreamIOError(SeqStreamError):
    """
    Raised when a stream cannot be opened, read, written or decompressed.

    Attributes:
        path: Path of the file involved (None for anonymous streams)
        cause: The underlying exception
    """

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        cause: Optional[BaseException] = None
    ):
        self.path = path
        self.cause = cause
        if path is not None:
            message = f"{path}: {message}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class FormatError(SeqStreamError, ValueError):
    """
    Raised when input does not follow the record grammar.

    Attributes:
        line_number: 1-based line where the problem was found, if known
        header: Header of the record being parsed, if one was read
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        header: Optional[str] = None
    ):
        self.line_number = line_number
        self.header = header
        context = []
        if line_number is not None:
            context.append(f"line {line_number}")
        if header is not None:
            context.append(f"record {header!r}")
        if context:
            message = f"{message} [{', '.join(context)}]"
        super().__init__(message)


class TruncatedRecordError(FormatError):
    """Raised when the stream ends in the middle of a record."""
    pass


class LengthMismatchError(FormatError):
    """Raised when a FASTQ sequence and its quality string differ in length."""

    def __init__(
        self,
        sequence_length: int,
        quality_length: int,
        line_number: Optional[int] = None,
        header: Optional[str] = None
    ):
        self.sequence_length = sequence_length
        self.quality_length = quality_length
        super().__init__(
            f"Sequence length {sequence_length} does not match "
            f"quality length {quality_length}",
            line_number=line_number,
            header=header,
        )
