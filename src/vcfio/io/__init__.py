"""
I/O module for vcfio.

Provides the streaming reader and writer for VCF text.
"""

from .input import VcfReader, open_vcf, read_text
from .output import VcfWriter

__all__ = [
    "VcfReader",
    "VcfWriter",
    "open_vcf",
    "read_text",
]
