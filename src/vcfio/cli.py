"""
CLI Entry Point: Exposes the vcfio functionality via command line.
"""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from . import __version__
from .config import Compression, ConvertConfig
from .errors import VcfError
from .io.input import open_vcf
from .pipeline import Pipeline
from .utils.logging import setup_logging

app = typer.Typer(help="vcfio: read and write VCF files")

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool, log_file: Path | None) -> None:
    try:
        setup_logging(verbose=verbose, log_file=log_file)
    except OSError as e:
        err_console.print(Text(f"Error: could not open log file {log_file}: {e}", style="bold red"))
        raise typer.Exit(code=1) from e


@app.callback()
def main():
    """
    vcfio: read and write VCF files
    """
    pass


@app.command()
def version():
    """Show the vcfio version."""
    console.print(f"vcfio {__version__}")


@app.command()
def convert(
    input_file: Path = typer.Argument(..., help="Input VCF (plain or gzipped)"),
    output_file: Path = typer.Argument(..., help="Output VCF path"),
    gzip_output: bool | None = typer.Option(
        None, "--gzip/--no-gzip", help="Compress the output (default: from the .gz suffix)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-V", help="Enable verbose debug logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Also write logs to this file"
    ),
):
    """
    Parse a VCF file and write it back out through the codecs.
    """
    _configure_logging(verbose, log_file)

    if gzip_output is None:
        compression = None
    else:
        compression = Compression.GZIP if gzip_output else Compression.NONE

    try:
        config = ConvertConfig(
            input_file=input_file,
            output_file=output_file,
            output_compression=compression,
            verbose=verbose,
        )
        stats = Pipeline(config, console=err_console).run()
    except (ValidationError, VcfError) as e:
        err_console.print(Text(f"Error: {e}", style="bold red"))
        raise typer.Exit(code=1) from e

    console.print(
        f"Converted [bold]{stats.records}[/bold] records "
        f"({stats.header_lines} header lines, {stats.samples} samples)"
    )


@app.command()
def header(
    input_file: Path = typer.Argument(..., help="Input VCF (plain or gzipped)"),
    verbose: bool = typer.Option(
        False, "--verbose", "-V", help="Enable verbose debug logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Also write logs to this file"
    ),
):
    """
    Print the parsed header lines of a VCF file.
    """
    _configure_logging(verbose, log_file)

    try:
        reader = open_vcf(input_file)
    except VcfError as e:
        err_console.print(Text(f"Error: {e}", style="bold red"))
        raise typer.Exit(code=1) from e

    parsed = reader.header
    reader.close()
    console.print(Text(f"{input_file.name} ({parsed.version or 'no version'})", style="bold"))
    for line in parsed.header_lines:
        console.print(Text.assemble((f"{type(line).__name__:<14}", "cyan"), str(line)))
    console.print(Text(f"Samples: {', '.join(parsed.column_names) or '-'}"))


if __name__ == "__main__":
    app()
