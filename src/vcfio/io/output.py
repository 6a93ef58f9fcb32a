"""
Output Writer: emits a Header and DataLines as VCF text.

The header block is written as soon as the writer is created; each data line
is then written preceded by a line break, so the output has no trailing
newline unless the caller adds one.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from ..core.body_codec import DataLineCodec
from ..core.header_codec import format_header_line
from ..core.preamble import format_column_line, format_version
from ..errors import VcfIOError
from ..models.body import DataLine
from ..models.header import Header


class VcfWriter:
    """Writes VCF text to a sink it borrows (or owns, via `open`)."""

    def __init__(self, sink: TextIO, header: Header):
        self.sink = sink
        self.header = header
        self.records_written = 0
        self._owns_sink = False
        self._write_header()

    @classmethod
    def open(cls, path: Path, header: Header) -> "VcfWriter":
        try:
            sink = open(path, "w", encoding="utf-8", newline="")
        except OSError as e:
            raise VcfIOError(f"could not open {path} for writing: {e}") from e
        try:
            writer = cls(sink, header)
        except Exception:
            sink.close()
            raise
        writer._owns_sink = True
        return writer

    def _emit(self, text: str) -> None:
        try:
            self.sink.write(text)
        except OSError as e:
            raise VcfIOError(f"could not write output: {e}") from e

    def _write_header(self):
        lines = [format_version(self.header.version)]
        lines.extend(format_header_line(hl) for hl in self.header.header_lines)
        lines.append(format_column_line(self.header.column_names))
        self._emit("\n".join(lines))

    def write(self, data_line: DataLine):
        self._emit("\n" + DataLineCodec.format(data_line))
        self.records_written += 1

    def write_all(self, data_lines: Iterable[DataLine]) -> int:
        """Write every line in order; returns how many were written."""
        count = 0
        for data_line in data_lines:
            self.write(data_line)
            count += 1
        return count

    def close(self):
        if self._owns_sink:
            self.sink.close()

    def __enter__(self) -> "VcfWriter":
        return self

    def __exit__(self, *args) -> None:
        self.close()
