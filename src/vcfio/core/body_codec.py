"""
Data Line Codec: tab-delimited record text <-> DataLine.

Expected column count is 8 when the header declares no samples, otherwise
8 + 1 (FORMAT) + number of samples.
"""

from pydantic import ValidationError

from ..errors import DataLineError
from ..models.body import (
    MISSING,
    ColonList,
    CommaList,
    DataLine,
    FilterList,
    SemicolonList,
)
from .preamble import FIXED_COLUMNS


class DataLineCodec:
    """
    Stateless parse/format of single data lines.
    """

    @staticmethod
    def expected_columns(column_names: list[str]) -> int:
        if column_names:
            # + 1 is for the FORMAT column
            return len(FIXED_COLUMNS) + 1 + len(column_names)
        return len(FIXED_COLUMNS)

    @staticmethod
    def parse(line: str, column_names: list[str]) -> DataLine:
        """
        Parse one data line.

        Args:
            line: The record without its line terminator.
            column_names: Sample names declared by the header.

        Returns:
            The parsed DataLine.

        Raises:
            DataLineError: On a column-count mismatch or an invalid field.
        """
        parts = line.split("\t")

        expected = DataLineCodec.expected_columns(column_names)
        if len(parts) != expected:
            raise DataLineError(
                f"invalid number of columns found, expected {expected}, found {len(parts)}"
            )

        try:
            format_keys = None
            samples = []
            if column_names:
                format_keys = ColonList.parse(parts[8], "FORMAT")
                samples = [ColonList.parse(p, "sample") for p in parts[9:]]

            return DataLine(
                chromosome=_non_empty(parts[0], "CHROM"),
                position=_parse_position(parts[1]),
                id=SemicolonList.parse(parts[2], "ID"),
                reference=_non_empty(parts[3], "REF"),
                alternative=CommaList.parse(parts[4], "ALT"),
                quality=_parse_quality(parts[5]),
                filter=FilterList.parse(parts[6], "FILTER"),
                info=SemicolonList.parse(parts[7], "INFO"),
                format=format_keys,
                samples=samples,
            )
        except ValidationError as e:
            raise DataLineError(f"invalid data line `{line}`: {e}") from e
        except ValueError as e:
            raise DataLineError(str(e)) from e

    @staticmethod
    def format(data_line: DataLine) -> str:
        """
        Serialize a DataLine; no line terminator is appended.

        FORMAT and the sample columns are written only when FORMAT is set.
        """
        quality = MISSING if data_line.quality is None else str(data_line.quality)
        parts = [
            data_line.chromosome,
            str(data_line.position),
            str(data_line.id),
            data_line.reference,
            str(data_line.alternative),
            quality,
            str(data_line.filter),
            str(data_line.info),
        ]
        if data_line.format is not None:
            parts.append(str(data_line.format))
            parts.extend(str(sample) for sample in data_line.samples)
        return "\t".join(parts)


def _non_empty(text: str, column: str) -> str:
    if not text:
        raise ValueError(f"{column} cannot be empty")
    return text


def _parse_unsigned(text: str, column: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f"invalid {column} value `{text}`, (expected a non-negative integer)")
    return int(text)


def _parse_position(text: str) -> int:
    return _parse_unsigned(_non_empty(text, "POS"), "POS")


def _parse_quality(text: str) -> int | None:
    _non_empty(text, "QUAL")
    if text == MISSING:
        return None
    return _parse_unsigned(text, "QUAL")


parse_data_line = DataLineCodec.parse
format_data_line = DataLineCodec.format
