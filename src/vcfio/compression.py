"""gzip helpers used at the file boundary; the codecs never call these."""

import gzip
import zlib

from .errors import CompressionError

GZIP_MAGIC = b"\x1f\x8b"


def is_gzipped(data: bytes) -> bool:
    return data[:2] == GZIP_MAGIC


def gz_encode(data: bytes) -> bytes:
    """Encode bytes using the gzip format."""
    try:
        return gzip.compress(data)
    except (OSError, zlib.error) as e:
        raise CompressionError(f"could not gzip-encode {len(data)} bytes: {e}") from e


def gz_decode(data: bytes) -> bytes:
    """Decode gzip bytes; truncated or corrupt input raises CompressionError."""
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise CompressionError(f"could not gzip-decode {len(data)} bytes: {e}") from e
