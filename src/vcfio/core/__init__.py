"""
Core module for vcfio.

Provides the text codecs: payload tokenizer, header line codec, preamble
parsers and data line codec.
"""

from .body_codec import DataLineCodec, format_data_line, parse_data_line
from .header_codec import format_header_line, known_tags, parse_header_line
from .payload import OTHER_KEY, PayloadTokenizer, parse_header_payload
from .preamble import (
    COLUMN_LINE_PREFIX,
    FIXED_COLUMNS,
    FORMAT_COLUMN,
    VERSION_PREFIX,
    format_column_line,
    format_version,
    parse_column_names,
    parse_version,
)

__all__ = [
    "COLUMN_LINE_PREFIX",
    "DataLineCodec",
    "FIXED_COLUMNS",
    "FORMAT_COLUMN",
    "OTHER_KEY",
    "PayloadTokenizer",
    "VERSION_PREFIX",
    "format_column_line",
    "format_data_line",
    "format_header_line",
    "format_version",
    "known_tags",
    "parse_column_names",
    "parse_data_line",
    "parse_header_line",
    "parse_header_payload",
    "parse_version",
]
