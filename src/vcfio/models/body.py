"""
Data line models for vcfio.

Most VCF columns share one shape: either the missing sentinel `.` or a list
of raw strings joined by a column-specific delimiter. `Delimited` models that
shape once; subclasses only pick the delimiter.
"""

from typing import Annotated, ClassVar

from pydantic import Field, model_validator

from .header import FrozenModel

MISSING = "."

# At least one token, none of them empty
Tokens = Annotated[tuple[Annotated[str, Field(min_length=1)], ...], Field(min_length=1)]


class Delimited(FrozenModel):
    """
    A missing-or-list column value.

    `entries` is None for the missing sentinel, otherwise the ordered,
    non-deduplicated tokens of the column.
    """

    delimiter: ClassVar[str] = ";"

    entries: Tokens | None = None

    @classmethod
    def missing(cls):
        return cls()

    @classmethod
    def of(cls, *entries: str):
        return cls(entries=entries)

    @classmethod
    def parse(cls, text: str, column: str = "value"):
        """Parse one column; raises ValueError on empty text or empty tokens."""
        if not text:
            raise ValueError(f"{column} cannot be empty")
        if text == MISSING:
            return cls()
        tokens = tuple(text.split(cls.delimiter))
        if not all(tokens):
            raise ValueError(f"{column} contains an empty entry: `{text}`")
        return cls(entries=tokens)

    @property
    def is_missing(self) -> bool:
        return self.entries is None

    def __str__(self) -> str:
        if self.entries is None:
            return MISSING
        return self.delimiter.join(self.entries)


class SemicolonList(Delimited):
    """ID and INFO columns."""

    delimiter: ClassVar[str] = ";"


class CommaList(Delimited):
    """ALT column."""

    delimiter: ClassVar[str] = ","


class ColonList(Delimited):
    """FORMAT column and per-sample columns."""

    delimiter: ClassVar[str] = ":"


class FilterList(SemicolonList):
    """FILTER column: missing, `PASS`, or the failed filter ids."""

    PASS: ClassVar[str] = "PASS"

    passed: bool = False

    @model_validator(mode="after")
    def validate_pass(self) -> "FilterList":
        if self.passed and self.entries is not None:
            raise ValueError("a passing filter cannot list failed filters")
        return self

    @classmethod
    def passing(cls) -> "FilterList":
        return cls(passed=True)

    @classmethod
    def parse(cls, text: str, column: str = "FILTER") -> "FilterList":
        if text == cls.PASS:
            return cls(passed=True)
        return super().parse(text, column)

    @property
    def is_missing(self) -> bool:
        return not self.passed and self.entries is None

    def __str__(self) -> str:
        if self.passed:
            return self.PASS
        return super().__str__()


class DataLine(FrozenModel):
    """One variant record."""

    chromosome: Annotated[str, Field(min_length=1)]
    position: int = Field(ge=0, description="1-based reference position")
    id: SemicolonList = SemicolonList()
    reference: Annotated[str, Field(min_length=1)]
    alternative: CommaList = CommaList()
    quality: int | None = Field(default=None, ge=0)
    filter: FilterList = FilterList()
    info: SemicolonList = SemicolonList()
    format: ColonList | None = None
    samples: list[ColonList] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_samples(self) -> "DataLine":
        if self.format is None and self.samples:
            raise ValueError("sample columns require a FORMAT column")
        return self

    def format_index(self, key: str) -> int | None:
        """Position of `key` within this line's FORMAT keys, or None."""
        if self.format is None or self.format.entries is None:
            return None
        try:
            return self.format.entries.index(key)
        except ValueError:
            return None

    def sample_value(self, sample_index: int, key: str) -> str | None:
        """
        Value of one FORMAT key for one sample.

        Returns None if the key is not in FORMAT, the sample is missing, the
        sample has fewer entries than FORMAT (trailing fields dropped), or the
        value itself is `.`.

        Raises:
            IndexError: If `sample_index` is not a sample column of this line.
        """
        if not 0 <= sample_index < len(self.samples):
            raise IndexError(
                f"sample index {sample_index} out of range for {len(self.samples)} samples"
            )
        index = self.format_index(key)
        if index is None:
            return None
        sample = self.samples[sample_index]
        if sample.entries is None or index >= len(sample.entries):
            return None
        value = sample.entries[index]
        return None if value == MISSING else value

    def __str__(self) -> str:
        from ..core.body_codec import format_data_line

        return format_data_line(self)
