"""
FASTA record type and codec.

A FASTA record is one header line starting with '>' followed by any
number of sequence lines. The sequence ends at the next header line or
at the end of the stream, so parsing needs one line of lookahead.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, Optional, Union

from seqstream.errors import FormatError
from seqstream.io.records import RecordIterator, RecordWriter
from seqstream.io.streams import (
    ENCODING,
    LineReader,
    has_line_break,
    open_for_read,
    open_for_write,
)

FASTA_MARKER = ">"

# Number of sequence characters shown by str(record)
DISPLAY_WIDTH = 30


@dataclass(frozen=True)
class FastaRecord:
    """
    Represents a single FASTA record.

    Attributes:
        header: Full header line including the leading '>'
        sequence: The sequence with line breaks removed (may be empty)
    """
    header: str
    sequence: str = ""

    def __post_init__(self):
        if not self.header.startswith(FASTA_MARKER):
            raise FormatError(f"FASTA header must start with '{FASTA_MARKER}'", header=self.header)
        if has_line_break(self.header) or has_line_break(self.sequence):
            raise FormatError("FASTA fields must not contain line breaks", header=self.header)
        if self.sequence.startswith(FASTA_MARKER):
            # Would be read back as the header of a new record
            raise FormatError(
                f"FASTA sequence must not start with '{FASTA_MARKER}'", header=self.header
            )

    @property
    def description(self) -> str:
        """Everything after the '>' marker."""
        return self.header[1:]

    @property
    def id(self) -> str:
        """Sequence identifier (first word after '>')."""
        parts = self.description.split(None, 1)
        return parts[0] if parts else ""

    def __len__(self) -> int:
        return len(self.sequence)

    def __str__(self) -> str:
        return f"{self.header} {self.sequence[:DISPLAY_WIDTH]}"

    def to_fasta(self) -> str:
        """Format as FASTA text: header and unwrapped sequence, newline-terminated."""
        return f"{self.header}\n{self.sequence}\n"


class FastaCodec:
    """Parses and serializes FASTA records over binary streams."""

    name = "fasta"
    marker = FASTA_MARKER

    def parse_next(self, reader: LineReader) -> Optional[FastaRecord]:
        """
        Read the next record from a line reader.

        Blank lines before a header are skipped. Body lines are joined
        verbatim, whitespace included, until a line starting with '>' is
        seen (left unconsumed for the next call) or the stream ends.

        Returns:
            The next FastaRecord, or None when the stream is exhausted

        Raises:
            FormatError: If non-blank text appears where a header is expected
        """
        header = reader.readline()
        while header is not None and not header.strip():
            header = reader.readline()
        if header is None:
            return None

        if not header.startswith(FASTA_MARKER):
            raise FormatError(
                f"Expected FASTA header starting with '{FASTA_MARKER}', got {header[:40]!r}",
                line_number=reader.line_number
            )

        chunks = []
        while True:
            line = reader.peek()
            # A marker line always opens the next record, never data
            if line is None or line.startswith(FASTA_MARKER):
                break
            chunks.append(line)
            reader.readline()

        return FastaRecord(header=header, sequence="".join(chunks))

    def serialize(self, record: FastaRecord, stream: BinaryIO) -> None:
        """Write one record to a binary stream."""
        if not isinstance(record, FastaRecord):
            raise TypeError(f"Expected FastaRecord, got {type(record).__name__}")
        stream.write(record.to_fasta().encode(ENCODING))


def read_fasta(filepath: Union[str, Path]) -> RecordIterator:
    """
    Read sequences from a FASTA file.

    Supports both plain text and gzip-compressed files (".gz" suffix).

    Args:
        filepath: Path to FASTA file

    Returns:
        A RecordIterator yielding FastaRecord objects

    Example:
        >>> with read_fasta("sequences.fasta.gz") as records:
        ...     for record in records:
        ...         print(f"{record.id}: {len(record)} bp")
    """
    return RecordIterator(open_for_read(filepath), FastaCodec(), path=filepath)


def write_fasta(
    records: Union[FastaRecord, Iterable[FastaRecord]],
    filepath: Union[str, Path]
) -> int:
    """
    Write sequences to a FASTA file.

    The output is gzip-compressed when the path ends in ".gz".

    Args:
        records: Single record or iterable of FastaRecord objects
        filepath: Output file path

    Returns:
        Number of records written

    Example:
        >>> records = [FastaRecord(">seq1 example", "ACGT")]
        >>> write_fasta(records, "output.fasta.gz")
        1
    """
    if isinstance(records, FastaRecord):
        records = [records]

    with RecordWriter(open_for_write(filepath), FastaCodec(), path=filepath) as writer:
        return writer.write_all(records)


def load_fasta_dict(filepath: Union[str, Path]) -> Dict[str, str]:
    """
    Load FASTA file as dictionary mapping IDs to sequences.

    Later records win when an ID occurs more than once.

    Args:
        filepath: Path to FASTA file

    Returns:
        Dictionary mapping sequence IDs to sequences
    """
    with read_fasta(filepath) as records:
        return {record.id: record.sequence for record in records}
