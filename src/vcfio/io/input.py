"""
Input Adapter: streaming VCF reader.

The reader consumes the header eagerly on construction and then yields one
DataLine per physical line, lazily, in file order.
"""

import io
import logging
from pathlib import Path
from typing import Iterator, TextIO

from ..compression import gz_decode, is_gzipped
from ..core.body_codec import DataLineCodec
from ..core.header_codec import HEADER_PREFIX, parse_header_line
from ..core.preamble import VERSION_PREFIX, parse_column_names, parse_version
from ..errors import DataLineError, HeaderLineError, VcfError, VcfIOError
from ..models.body import DataLine
from ..models.header import Header, HeaderLine

logger = logging.getLogger(__name__)


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class VcfReader:
    """
    Reads a VCF text stream.

    Usage:
        reader = VcfReader(stream)
        reader.header.column_names
        for data_line in reader:
            ...

    Iteration is single pass. A malformed line raises and ends the useful
    life of the reader; callers should stop consuming on error.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self.line_number = 0
        self.header = self._read_header()
        logger.debug(
            "Parsed header: version=%s, %d header lines, %d samples",
            self.header.version or "<none>",
            len(self.header.header_lines),
            len(self.header.column_names),
        )

    @property
    def column_names(self) -> list[str]:
        return self.header.column_names

    def _readline(self) -> str:
        try:
            line = self._stream.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise VcfIOError(f"could not read line {self.line_number + 1}: {e}") from e
        if line:
            self.line_number += 1
        return line

    def _read_header(self) -> Header:
        version = ""
        header_lines: list[HeaderLine] = []
        column_names: list[str] = []

        while True:
            raw = self._readline()
            if not raw:
                # a header cut short still holds what was read
                logger.debug("Input ended after line %d without a column line", self.line_number)
                break
            line = _strip_terminator(raw)

            try:
                if line.startswith(VERSION_PREFIX):
                    version = parse_version(line)
                elif line.startswith(HEADER_PREFIX):
                    header_lines.append(parse_header_line(line))
                elif line.startswith("#"):
                    column_names = parse_column_names(line)
                    break
                else:
                    raise HeaderLineError(f"invalid line while parsing header: `{line}`")
            except VcfError as e:
                # same error type, with the offending line number
                raise type(e)(f"line {self.line_number}: {e}") from e

        return Header(version=version, header_lines=header_lines, column_names=column_names)

    def next_item(self) -> DataLine | None:
        """Read the next data line, or None at end of input."""
        raw = self._readline()
        if not raw:
            return None
        try:
            return DataLineCodec.parse(_strip_terminator(raw), self.header.column_names)
        except DataLineError as e:
            raise DataLineError(str(e), line_number=self.line_number) from e

    def __iter__(self) -> Iterator[DataLine]:
        return self

    def __next__(self) -> DataLine:
        data_line = self.next_item()
        if data_line is None:
            raise StopIteration
        return data_line

    def close(self):
        self._stream.close()

    def __enter__(self) -> "VcfReader":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def read_text(path: Path) -> str:
    """Read a VCF file as text, gunzipping it when it carries the gzip magic."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise VcfIOError(f"could not read {path}: {e}") from e
    if is_gzipped(data):
        logger.debug("%s is gzip-compressed, decoding", path)
        data = gz_decode(data)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise VcfIOError(f"{path} is not valid UTF-8: {e}") from e


def open_vcf(path: Path) -> VcfReader:
    """Open a plain or gzipped VCF file and return a reader over it."""
    return VcfReader(io.StringIO(read_text(path)))
