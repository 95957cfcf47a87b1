"""
Extension-based format lookup.

The record format is chosen from the file name: the ".gz" suffix is
ignored, and the remaining suffix names the format. File contents are
never sniffed.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from seqstream.io.fasta import FastaCodec
from seqstream.io.fastq import FastqCodec
from seqstream.io.records import RecordIterator, RecordWriter
from seqstream.io.streams import GZIP_SUFFIX, open_for_read, open_for_write

FASTA_SUFFIXES = {".fasta", ".fa", ".fna", ".ffn", ".faa", ".frn", ".fas"}
FASTQ_SUFFIXES = {".fastq", ".fq"}

CODECS = {
    "fasta": FastaCodec,
    "fastq": FastqCodec,
}


def detect_format(filepath: Union[str, Path]) -> str:
    """
    Infer the record format from a file name.

    Args:
        filepath: Path such as "reads.fq.gz" or "genome.fa"

    Returns:
        "fasta" or "fastq"

    Raises:
        ValueError: If the suffix is not a known FASTA/FASTQ extension

    Example:
        >>> detect_format("reads.fastq.gz")
        'fastq'
    """
    filepath = Path(filepath)
    if filepath.suffix == GZIP_SUFFIX:
        filepath = filepath.with_suffix("")
    suffix = filepath.suffix.lower()

    if suffix in FASTA_SUFFIXES:
        return "fasta"
    if suffix in FASTQ_SUFFIXES:
        return "fastq"
    raise ValueError(f"Cannot infer sequence format from file name: {filepath.name}")


def get_codec(fmt: str):
    """Return a codec instance for "fasta" or "fastq"."""
    try:
        return CODECS[fmt]()
    except KeyError:
        raise ValueError(f"Unknown format: {fmt}") from None


def read_records(
    filepath: Union[str, Path],
    fmt: Optional[str] = None
) -> RecordIterator:
    """
    Open a FASTA or FASTQ file, compressed or not, as a record iterator.

    Args:
        filepath: Input path
        fmt: "fasta" or "fastq"; inferred from the file name if None

    Returns:
        A RecordIterator owning the opened stream
    """
    codec = get_codec(fmt or detect_format(filepath))
    return RecordIterator(open_for_read(filepath), codec, path=filepath)


def write_records(
    records: Iterable,
    filepath: Union[str, Path],
    fmt: Optional[str] = None
) -> int:
    """
    Write records to a FASTA or FASTQ file, compressed if the path ends in ".gz".

    Args:
        records: Iterable of FastaRecord or FastqRecord objects
        filepath: Output path
        fmt: "fasta" or "fastq"; inferred from the file name if None

    Returns:
        Number of records written
    """
    codec = get_codec(fmt or detect_format(filepath))
    with RecordWriter(open_for_write(filepath), codec, path=filepath) as writer:
        return writer.write_all(records)
