"""Configuration for vcfio runs."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, field_validator


class Compression(str, Enum):
    """Compression applied to the output file."""

    NONE = "none"
    GZIP = "gzip"


class ConvertConfig(BaseModel):
    """
    Configuration for a read -> write conversion.
    """

    input_file: Path
    output_file: Path

    # None infers the compression from the output suffix
    output_compression: Compression | None = None

    verbose: bool = False

    @field_validator("input_file")
    @classmethod
    def validate_input_exists(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"File not found: {v}")
        if v.is_dir():
            raise ValueError(f"Input path must be a file, not a directory: {v}")
        return v

    @field_validator("output_file")
    @classmethod
    def validate_output_file(cls, v: Path) -> Path:
        if v.is_dir():
            raise ValueError(f"Output path must be a file, not a directory: {v}")
        return v

    @property
    def compress_output(self) -> bool:
        if self.output_compression is None:
            return self.output_file.suffix.lower() in (".gz", ".bgz")
        return self.output_compression is Compression.GZIP
