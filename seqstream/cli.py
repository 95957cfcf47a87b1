"""
Typer CLI for seqstream.
"""
import logging
import pathlib
from typing import Optional

import typer

from seqstream.errors import SeqStreamError
from seqstream.io.formats import detect_format, read_records, write_records

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Streaming FASTA/FASTQ tools")

FORMAT_HELP = "fasta or fastq (default: inferred from the file name)"


def _fail(message: str) -> None:
    typer.secho(f"error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Read and write FASTA/FASTQ files, plain or gzip-compressed."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


# ------------------------------------------------------------------ convert
@app.command("convert")
def convert(
    source: pathlib.Path,
    dest: pathlib.Path,
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help=FORMAT_HELP),
):
    """Copy records from SOURCE to DEST, (de)compressing by file extension."""
    try:
        fmt = fmt or detect_format(source)
        with read_records(source, fmt) as records:
            written = write_records(records, dest, fmt)
    except (SeqStreamError, ValueError) as exc:
        _fail(str(exc))
    logger.info("Wrote %d records to %s", written, dest)
    typer.echo(f"{written} records written to {dest}")


# ------------------------------------------------------------------ count
@app.command("count")
def count(
    path: pathlib.Path,
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help=FORMAT_HELP),
):
    """Print the number of records in PATH."""
    try:
        with read_records(path, fmt) as records:
            total = sum(1 for _ in records)
    except (SeqStreamError, ValueError) as exc:
        _fail(str(exc))
    typer.echo(total)


# ------------------------------------------------------------------ show
@app.command("show")
def show(
    path: pathlib.Path,
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help=FORMAT_HELP),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Show at most N records"),
):
    """Print a one-line summary of each record in PATH."""
    try:
        with read_records(path, fmt) as records:
            for i, record in enumerate(records):
                if limit is not None and i >= limit:
                    break
                typer.echo(str(record))
    except (SeqStreamError, ValueError) as exc:
        _fail(str(exc))


if __name__ == "__main__":
    app()
