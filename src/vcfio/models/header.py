"""
Header data models for vcfio.

A VCF header is a version string, an ordered list of `##` meta lines and the
sample names declared on the `#CHROM` row. Every recognised `##TAG` maps to
one frozen model class below; anything else is kept as an `OtherLine`.
"""

from enum import Enum
from typing import Annotated, ClassVar, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

NonEmptyStr = Annotated[str, Field(min_length=1)]


class FrozenModel(BaseModel):
    """Immutable, value-compared model base."""

    model_config = ConfigDict(frozen=True)


class NumberKind(str, Enum):
    """Symbolic values of the `Number` key."""

    ALLELE = "A"  # one value per alternate allele
    REFERENCE = "R"  # one value per allele, reference included
    GENOTYPE = "G"  # one value per possible genotype
    UNKNOWN = "."  # varies, unknown or unbounded


# Either a fixed non-negative count or one of the symbolic kinds
Number = Annotated[
    Union[NumberKind, Annotated[int, Field(ge=0)]],
    Field(union_mode="left_to_right"),
]


class KnownAltId(str, Enum):
    """Structural variant tags with a meaning fixed by the format."""

    DEL = "DEL"
    INS = "INS"
    DUP = "DUP"
    INV = "INV"
    CNV = "CNV"
    BND = "BND"


# Unknown tokens (ambiguity codes, sub-types such as ME or ALU) stay plain strings
AltId = Annotated[
    Union[KnownAltId, NonEmptyStr],
    Field(union_mode="left_to_right"),
]


class InfoValueType(str, Enum):
    CHARACTER = "Character"
    FLAG = "Flag"
    FLOAT = "Float"
    INTEGER = "Integer"
    STRING = "String"


class FormatValueType(str, Enum):
    CHARACTER = "Character"
    FLOAT = "Float"
    INTEGER = "Integer"
    STRING = "String"


class PedigreeOriginal(FrozenModel):
    """The sample was derived from another one (e.g. tumour from germline)."""

    original: NonEmptyStr


class PedigreeParents(FrozenModel):
    father: NonEmptyStr
    mother: NonEmptyStr


class PedigreeAncestors(FrozenModel):
    """Ordered ancestor ids, `Name_1` first."""

    ancestors: list[NonEmptyStr] = Field(min_length=1)


PedigreeRelation = Union[PedigreeOriginal, PedigreeParents, PedigreeAncestors]


class HeaderLineBase(FrozenModel):
    """Common base of every `##` header line model."""

    tag: ClassVar[str] = ""

    def __str__(self) -> str:
        from ..core.header_codec import format_header_line

        return format_header_line(self)


class AltLine(HeaderLineBase):
    """`##ALT=<ID=type,Description="description">`"""

    tag: ClassVar[str] = "ALT"

    id: list[AltId] = Field(min_length=1)
    description: str


class AssemblyLine(HeaderLineBase):
    """`##assembly=url`"""

    tag: ClassVar[str] = "assembly"

    url: NonEmptyStr


class ContigLine(HeaderLineBase):
    """`##contig=<ID=ctg1,length=81195210,species="Homo sapiens",...>`

    Keys other than ID and species are kept in `other`, in input order.
    """

    tag: ClassVar[str] = "contig"

    id: NonEmptyStr
    species: str | None = None
    other: dict[str, str] = Field(default_factory=dict)


class FileDateLine(HeaderLineBase):
    """`##fileDate=20100501`"""

    tag: ClassVar[str] = "fileDate"

    date: NonEmptyStr


class FilterLine(HeaderLineBase):
    """`##FILTER=<ID=ID,Description="description">`"""

    tag: ClassVar[str] = "FILTER"

    id: NonEmptyStr
    description: str


class FormatLine(HeaderLineBase):
    """`##FORMAT=<ID=ID,Number=number,Type=type,Description="description">`"""

    tag: ClassVar[str] = "FORMAT"

    id: NonEmptyStr
    number: Number = NumberKind.UNKNOWN
    type: FormatValueType = FormatValueType.STRING
    description: str


class InfoLine(HeaderLineBase):
    """`##INFO=<ID=ID,Number=number,Type=type,Description="description",Source="source",Version="version">`"""

    tag: ClassVar[str] = "INFO"

    id: NonEmptyStr
    number: Number = NumberKind.UNKNOWN
    type: InfoValueType = InfoValueType.STRING
    description: str
    source: str | None = None
    version: str | None = None


class MetaLine(HeaderLineBase):
    """`##META=<ID=Assay,Type=String,Number=.,Values=[WholeGenome, Exome]>`

    The format leaves the vocabulary of Type and Number open, so `type` is a
    plain string.
    """

    tag: ClassVar[str] = "META"

    id: NonEmptyStr
    type: NonEmptyStr
    number: Number = NumberKind.UNKNOWN
    values: list[str] = Field(min_length=1)


class PedigreeLine(HeaderLineBase):
    """`##PEDIGREE=<ID=TumourSample,Original=GermlineID>` and friends."""

    tag: ClassVar[str] = "PEDIGREE"

    id: NonEmptyStr
    relation: PedigreeRelation


class PedigreeDBLine(HeaderLineBase):
    """`##pedigreeDB=url`"""

    tag: ClassVar[str] = "pedigreeDB"

    url: NonEmptyStr


class SampleLine(HeaderLineBase):
    """`##SAMPLE=<ID=S1,Genomes=Germline;Tumor,Description="...",DOI=url>`

    Free keys are kept in `meta` with their values split on `;`.
    """

    tag: ClassVar[str] = "SAMPLE"

    id: NonEmptyStr
    meta: dict[str, list[str]] = Field(default_factory=dict)
    description: str
    doi: str | None = None


class OtherLine(HeaderLineBase):
    """Any `##KEY=value` line whose key is not recognised."""

    key: NonEmptyStr
    value: NonEmptyStr


HeaderLine = Union[
    AltLine,
    AssemblyLine,
    ContigLine,
    FileDateLine,
    FilterLine,
    FormatLine,
    InfoLine,
    MetaLine,
    PedigreeLine,
    PedigreeDBLine,
    SampleLine,
    OtherLine,
]

LineT = TypeVar("LineT", bound=HeaderLineBase)


class Header(FrozenModel):
    """
    Everything that precedes the first data line.

    `column_names` holds only the sample names; the eight fixed columns and
    FORMAT are implied.
    """

    version: str = ""
    header_lines: list[HeaderLine] = Field(default_factory=list)
    column_names: list[str] = Field(default_factory=list)

    @field_validator("column_names")
    @classmethod
    def validate_unique_samples(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError(f"sample column names must be unique: {v}")
        return v

    @property
    def has_samples(self) -> bool:
        return bool(self.column_names)

    def lines_of(self, kind: type[LineT]) -> list[LineT]:
        """Header lines of one kind, in file order."""
        return [line for line in self.header_lines if isinstance(line, kind)]

    def sample_index(self, name: str) -> int | None:
        try:
            return self.column_names.index(name)
        except ValueError:
            return None
