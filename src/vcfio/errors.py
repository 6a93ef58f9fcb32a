"""Exception types raised by vcfio."""


class VcfError(Exception):
    """Base class for every error raised by vcfio."""


class PayloadError(VcfError, ValueError):
    """A `<key=value,...>` header payload could not be tokenized."""


class HeaderLineError(VcfError, ValueError):
    """A `##` header line is malformed or misses a required key."""


class PreambleError(VcfError, ValueError):
    """The version line or the column-name line is malformed."""


class DataLineError(VcfError, ValueError):
    """A data line has the wrong shape or an unparsable field."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class VcfIOError(VcfError):
    """Reading from or writing to the underlying stream failed."""


class CompressionError(VcfError):
    """gzip encoding or decoding failed."""
