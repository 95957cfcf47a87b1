"""
Sequence file I/O.

This module provides compression-transparent reading and writing of
the two classic flat sequence formats:
- FASTA: Header + multi-line sequence
- FASTQ: Sequence + quality scores (NGS data)

A ".gz" suffix on the file name selects gzip framing for both reading
and writing.
"""

from seqstream.io.streams import (
    open_for_read,
    open_for_write,
    is_compressed,
    LineReader,
    BUFFER_SIZE,
    COMPRESSION_LEVEL,
)

from seqstream.io.records import (
    RecordIterator,
    RecordWriter,
    IteratorState,
)

from seqstream.io.fasta import (
    read_fasta,
    write_fasta,
    load_fasta_dict,
    FastaRecord,
    FastaCodec,
)

from seqstream.io.fastq import (
    read_fastq,
    write_fastq,
    paired_end_reader,
    FastqRecord,
    FastqCodec,
    quality_to_phred,
    phred_to_quality,
)

from seqstream.io.formats import (
    detect_format,
    get_codec,
    read_records,
    write_records,
)

__all__ = [
    "open_for_read",
    "open_for_write",
    "is_compressed",
    "LineReader",
    "BUFFER_SIZE",
    "COMPRESSION_LEVEL",
    "RecordIterator",
    "RecordWriter",
    "IteratorState",
    "read_fasta",
    "write_fasta",
    "load_fasta_dict",
    "FastaRecord",
    "FastaCodec",
    "read_fastq",
    "write_fastq",
    "paired_end_reader",
    "FastqRecord",
    "FastqCodec",
    "quality_to_phred",
    "phred_to_quality",
    "detect_format",
    "get_codec",
    "read_records",
    "write_records",
]
