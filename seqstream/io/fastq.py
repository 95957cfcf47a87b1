"""
FASTQ record type and codec.

FASTQ is a text-based format for storing nucleotide sequences
along with quality scores. Each record consists of exactly 4 lines:
1. Header line starting with '@' followed by sequence ID
2. Sequence line
3. '+' line (optionally followed by the header text again)
4. Quality line (ASCII-encoded Phred scores, same length as the sequence)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from seqstream.errors import FormatError, LengthMismatchError, TruncatedRecordError
from seqstream.io.records import RecordIterator, RecordWriter
from seqstream.io.streams import (
    ENCODING,
    LineReader,
    has_line_break,
    open_for_read,
    open_for_write,
)

FASTQ_MARKER = "@"
SEPARATOR_MARKER = "+"

# Phred quality score encoding offsets
PHRED33_OFFSET = 33  # Sanger/Illumina 1.8+
PHRED64_OFFSET = 64  # Illumina 1.3-1.7

# Number of sequence/quality characters shown by str(record)
DISPLAY_WIDTH = 30


@dataclass(frozen=True)
class FastqRecord:
    """
    Represents a single FASTQ record.

    Attributes:
        header: Header line including the leading '@'
        sequence: The nucleotide sequence
        separator: Separator line including the leading '+'
        quality: Quality string (ASCII-encoded), same length as sequence
    """
    header: str
    sequence: str
    separator: str = SEPARATOR_MARKER
    quality: str = ""

    def __post_init__(self):
        if not self.header.startswith(FASTQ_MARKER):
            raise FormatError(f"FASTQ header must start with '{FASTQ_MARKER}'", header=self.header)
        if not self.separator.startswith(SEPARATOR_MARKER):
            raise FormatError(
                f"FASTQ separator must start with '{SEPARATOR_MARKER}'", header=self.header
            )
        if self.separator[1:] not in ("", self.header[1:]):
            raise FormatError("FASTQ separator must be '+' or repeat the header", header=self.header)
        fields = (self.header, self.sequence, self.separator, self.quality)
        if any(has_line_break(field) for field in fields):
            raise FormatError("FASTQ fields must not contain line breaks", header=self.header)
        if len(self.sequence) != len(self.quality):
            raise LengthMismatchError(len(self.sequence), len(self.quality), header=self.header)

    @property
    def description(self) -> str:
        """Everything after the '@' marker."""
        return self.header[1:]

    @property
    def id(self) -> str:
        """Sequence identifier (first word after '@')."""
        parts = self.description.split(None, 1)
        return parts[0] if parts else ""

    def __len__(self) -> int:
        return len(self.sequence)

    def __str__(self) -> str:
        return (
            f"{self.header} {self.sequence[:DISPLAY_WIDTH]} "
            f"{self.quality[:DISPLAY_WIDTH]}"
        )

    def to_fastq(self) -> str:
        """Format as the four newline-terminated FASTQ lines."""
        return f"{self.header}\n{self.sequence}\n{self.separator}\n{self.quality}\n"

    def quality_scores(self, offset: int = PHRED33_OFFSET) -> np.ndarray:
        """
        Convert quality string to numeric Phred scores.

        Args:
            offset: ASCII offset (33 for Phred+33, 64 for Phred+64)

        Returns:
            numpy array of integer quality scores
        """
        return np.array([ord(c) - offset for c in self.quality], dtype=np.int32)

    def mean_quality(self, offset: int = PHRED33_OFFSET) -> float:
        """Calculate mean quality score (0.0 for an empty record)."""
        if not self.quality:
            return 0.0
        return float(np.mean(self.quality_scores(offset)))

    def error_probabilities(self, offset: int = PHRED33_OFFSET) -> np.ndarray:
        """
        Convert quality scores to error probabilities.

        P(error) = 10^(-Q/10)

        Returns:
            numpy array of error probabilities
        """
        scores = self.quality_scores(offset)
        return np.power(10.0, -scores / 10)


def quality_to_phred(quality_string: str, offset: int = PHRED33_OFFSET) -> List[int]:
    """
    Convert quality string to Phred scores.

    Args:
        quality_string: ASCII-encoded quality string
        offset: Phred offset (33 or 64)

    Returns:
        List of integer Phred scores
    """
    return [ord(c) - offset for c in quality_string]


def phred_to_quality(phred_scores: Iterable[int], offset: int = PHRED33_OFFSET) -> str:
    """
    Convert Phred scores to quality string.

    Args:
        phred_scores: Integer Phred scores
        offset: Phred offset (33 or 64)

    Returns:
        ASCII-encoded quality string
    """
    return "".join(chr(int(score) + offset) for score in phred_scores)


class FastqCodec:
    """Parses and serializes FASTQ records over binary streams."""

    name = "fastq"
    marker = FASTQ_MARKER

    def parse_next(self, reader: LineReader) -> Optional[FastqRecord]:
        """
        Read the next four-line record from a line reader.

        Returns:
            The next FastqRecord, or None when the stream is exhausted

        Raises:
            FormatError: If a header or separator marker is missing
            TruncatedRecordError: If the stream ends inside a record
            LengthMismatchError: If sequence and quality lengths differ
        """
        header = reader.readline()
        while header is not None and not header.strip():
            header = reader.readline()
        if header is None:
            return None

        header_line = reader.line_number
        if not header.startswith(FASTQ_MARKER):
            raise FormatError(
                f"Expected FASTQ header starting with '{FASTQ_MARKER}', got {header[:40]!r}",
                line_number=header_line
            )

        sequence = self._require_line(reader, header, "sequence")
        separator = self._require_line(reader, header, "separator")
        if not separator.startswith(SEPARATOR_MARKER):
            raise FormatError(
                f"Expected separator line starting with '{SEPARATOR_MARKER}', got {separator[:40]!r}",
                line_number=reader.line_number,
                header=header
            )
        if len(separator) > 1 and separator[1:] != header[1:]:
            raise FormatError(
                "Separator line does not repeat the header",
                line_number=reader.line_number,
                header=header
            )
        quality = self._require_line(reader, header, "quality")

        if len(sequence) != len(quality):
            raise LengthMismatchError(
                len(sequence), len(quality), line_number=header_line, header=header
            )

        return FastqRecord(header=header, sequence=sequence, separator=separator, quality=quality)

    @staticmethod
    def _require_line(reader: LineReader, header: str, field: str) -> str:
        line = reader.readline()
        if line is None:
            raise TruncatedRecordError(
                f"Stream ended before the {field} line",
                line_number=reader.line_number,
                header=header
            )
        return line

    def serialize(self, record: FastqRecord, stream: BinaryIO) -> None:
        """Write one record to a binary stream."""
        if not isinstance(record, FastqRecord):
            raise TypeError(f"Expected FastqRecord, got {type(record).__name__}")
        stream.write(record.to_fastq().encode(ENCODING))


def read_fastq(filepath: Union[str, Path]) -> RecordIterator:
    """
    Read sequences from a FASTQ file.

    Supports both plain text and gzip-compressed files (".gz" suffix).

    Args:
        filepath: Path to FASTQ file

    Returns:
        A RecordIterator yielding FastqRecord objects

    Example:
        >>> with read_fastq("reads.fastq.gz") as reads:
        ...     for record in reads:
        ...         if record.mean_quality() > 20:
        ...             print(record.id)
    """
    return RecordIterator(open_for_read(filepath), FastqCodec(), path=filepath)


def write_fastq(
    records: Union[FastqRecord, Iterable[FastqRecord]],
    filepath: Union[str, Path]
) -> int:
    """
    Write sequences to a FASTQ file.

    Args:
        records: Single record or iterable of FastqRecord objects
        filepath: Output file path (gzip-compressed if it ends in ".gz")

    Returns:
        Number of records written

    Example:
        >>> records = [FastqRecord("@read1", "ACGT", "+", "IIII")]
        >>> write_fastq(records, "output.fastq")
        1
    """
    if isinstance(records, FastqRecord):
        records = [records]

    with RecordWriter(open_for_write(filepath), FastqCodec(), path=filepath) as writer:
        return writer.write_all(records)


def paired_end_reader(
    filepath1: Union[str, Path],
    filepath2: Union[str, Path]
) -> Iterator[Tuple[FastqRecord, FastqRecord]]:
    """
    Read paired-end FASTQ files simultaneously.

    Args:
        filepath1: Path to R1 (forward) reads
        filepath2: Path to R2 (reverse) reads

    Yields:
        Tuples of (R1 record, R2 record)

    Raises:
        FormatError: If one file has more records than the other
    """
    with read_fastq(filepath1) as r1_reader, read_fastq(filepath2) as r2_reader:
        for r1 in r1_reader:
            r2 = next(r2_reader, None)
            if r2 is None:
                raise FormatError(f"{filepath2} ended before {filepath1}", header=r1.header)
            yield (r1, r2)
        extra = next(r2_reader, None)
        if extra is not None:
            raise FormatError(f"{filepath1} ended before {filepath2}", header=extra.header)
