"""
Preamble parsers: the `##fileformat=` version line and the `#CHROM` row.
"""

from collections import Counter

from ..errors import PreambleError

VERSION_PREFIX = "##fileformat="

FIXED_COLUMNS = ("CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO")
FORMAT_COLUMN = "FORMAT"

COLUMN_LINE_PREFIX = "#" + "\t".join(FIXED_COLUMNS)


def parse_version(version_line: str) -> str:
    """
    Extract the version string.

    Example:
        ##fileformat=VCFv4.3 --> VCFv4.3
    """
    if not version_line.startswith(VERSION_PREFIX):
        raise PreambleError(f"invalid version line `{version_line}`")
    return version_line[len(VERSION_PREFIX) :]


def format_version(version: str) -> str:
    return f"{VERSION_PREFIX}{version}"


def parse_column_names(column_line: str) -> list[str]:
    """
    Extract the sample names from the column-name row.

    Example:
        #CHROM  POS  ID  REF  ALT  QUAL  FILTER  INFO  FORMAT  NA00001  NA00002
        --> ["NA00001", "NA00002"]

    Returns an empty list when the row stops after INFO.

    Raises:
        PreambleError: If the fixed columns are missing, anything other than
            FORMAT follows INFO, FORMAT is not followed by samples, or a
            sample name is repeated.
    """
    if not column_line.startswith(COLUMN_LINE_PREFIX):
        raise PreambleError(
            f"invalid columns line `{column_line}` "
            f"(columns line should start with `{COLUMN_LINE_PREFIX}`)"
        )

    remaining = column_line[len(COLUMN_LINE_PREFIX) :]
    if not remaining:
        return []

    columns = remaining.split("\t")
    # columns[0] is the empty string before the tab that follows INFO
    if columns[0] or len(columns) < 2 or columns[1] != FORMAT_COLUMN:
        raise PreambleError(
            f"unexpected column name after `INFO` in line `{column_line}` "
            f"(expected `{FORMAT_COLUMN}`)"
        )

    samples = columns[2:]
    if not samples:
        raise PreambleError(f"no sample columns follow `{FORMAT_COLUMN}` in line `{column_line}`")
    if not all(samples):
        raise PreambleError(f"empty sample column name in line `{column_line}`")

    duplicates = sorted(name for name, count in Counter(samples).items() if count > 1)
    if duplicates:
        raise PreambleError(
            f"sample column names must be unique, duplicated: {duplicates}"
        )
    return samples


def format_column_line(column_names: list[str]) -> str:
    """Build the `#CHROM...` row; FORMAT is added only when samples exist."""
    if not column_names:
        return COLUMN_LINE_PREFIX
    return "\t".join([COLUMN_LINE_PREFIX, FORMAT_COLUMN, *column_names])
