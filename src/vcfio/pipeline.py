"""
Pipeline Orchestrator: read a VCF, re-emit it through the writer.

This module handles:
1. Reading the input (gunzipping it when needed).
2. Parsing the header and streaming every data line through the codecs.
3. Writing the re-serialized text, gzip-compressed if requested.
"""

import io
import logging

from pydantic import BaseModel
from rich.console import Console

from .compression import gz_encode
from .config import ConvertConfig
from .errors import VcfIOError
from .io.input import VcfReader, read_text
from .io.output import VcfWriter
from .utils.logging import timed

logger = logging.getLogger(__name__)


class ConversionStats(BaseModel):
    version: str
    header_lines: int
    samples: int
    records: int


class Pipeline:
    def __init__(self, config: ConvertConfig, console: Console | None = None):
        self.config = config
        self.console = console or Console(stderr=True)

    def run(self) -> ConversionStats:
        """Execute the conversion."""
        with timed(f"Reading {self.config.input_file}", logger):
            text = read_text(self.config.input_file)

        with self.console.status("[bold green]Converting records...[/bold green]"):
            reader = VcfReader(io.StringIO(text))
            buffer = io.StringIO()
            writer = VcfWriter(buffer, reader.header)
            records = writer.write_all(reader)

        # The writer separates records; the file itself ends with a newline
        output = buffer.getvalue() + "\n"
        data = output.encode("utf-8")
        if self.config.compress_output:
            data = gz_encode(data)

        try:
            self.config.output_file.write_bytes(data)
        except OSError as e:
            raise VcfIOError(f"could not write {self.config.output_file}: {e}") from e

        stats = ConversionStats(
            version=reader.header.version,
            header_lines=len(reader.header.header_lines),
            samples=len(reader.header.column_names),
            records=records,
        )
        logger.info(
            "Wrote %d records (%d header lines, %d samples) to %s",
            stats.records,
            stats.header_lines,
            stats.samples,
            self.config.output_file,
        )
        return stats
