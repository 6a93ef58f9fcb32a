"""
Utility modules for vcfio.

Provides logging and timing helpers shared by the pipeline and CLI.
"""

from .logging import setup_logging, timed

__all__ = [
    "setup_logging",
    "timed",
]
