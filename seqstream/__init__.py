"""
seqstream: streaming FASTA/FASTQ I/O with transparent gzip support

This package provides tools for:
- Opening plain or gzip-compressed files from the file name alone
- Parsing FASTA and FASTQ records lazily from any binary stream
- Writing records back out, compressed or not
- Reporting malformed input with line numbers and record headers
"""

__version__ = "0.1.0"
__author__ = "seqstream Contributors"

from seqstream.errors import (
    SeqStreamError,
    StreamIOError,
    FormatError,
    TruncatedRecordError,
    LengthMismatchError,
)

from seqstream.io import (
    open_for_read,
    open_for_write,
    read_fasta,
    read_fastq,
    read_records,
    write_fasta,
    write_fastq,
    write_records,
    FastaRecord,
    FastqRecord,
    RecordIterator,
    RecordWriter,
)

__all__ = [
    # Errors
    "SeqStreamError",
    "StreamIOError",
    "FormatError",
    "TruncatedRecordError",
    "LengthMismatchError",
    # Streams
    "open_for_read",
    "open_for_write",
    # Records
    "read_fasta",
    "read_fastq",
    "read_records",
    "write_fasta",
    "write_fastq",
    "write_records",
    "FastaRecord",
    "FastqRecord",
    "RecordIterator",
    "RecordWriter",
]
