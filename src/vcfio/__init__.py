"""
vcfio - A reader and writer for the Variant Call Format (VCF).

This package parses VCF text into typed Pydantic models (header lines and
data lines) and serializes those models back into the same grammar.

Example usage:
    >>> from vcfio import open_vcf
    >>> reader = open_vcf("calls.vcf.gz")
    >>> for record in reader:
    ...     print(record.chromosome, record.position)

    $ vcfio convert calls.vcf.gz roundtrip.vcf
"""

__version__ = "0.1.0"

from .errors import (
    CompressionError,
    DataLineError,
    HeaderLineError,
    PayloadError,
    PreambleError,
    VcfError,
    VcfIOError,
)
from .io import VcfReader, VcfWriter, open_vcf
from .models import DataLine, Header, HeaderLine

__all__ = [
    "__version__",
    "CompressionError",
    "DataLine",
    "DataLineError",
    "Header",
    "HeaderLine",
    "HeaderLineError",
    "PayloadError",
    "PreambleError",
    "VcfError",
    "VcfIOError",
    "VcfReader",
    "VcfWriter",
    "open_vcf",
]
