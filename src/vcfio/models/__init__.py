"""
Data models for vcfio.

Provides Pydantic models for the header, every header line kind and data lines.
"""

from .body import (
    MISSING,
    ColonList,
    CommaList,
    DataLine,
    Delimited,
    FilterList,
    SemicolonList,
)
from .header import (
    AltId,
    AltLine,
    AssemblyLine,
    ContigLine,
    FileDateLine,
    FilterLine,
    FormatLine,
    FormatValueType,
    Header,
    HeaderLine,
    HeaderLineBase,
    InfoLine,
    InfoValueType,
    KnownAltId,
    MetaLine,
    Number,
    NumberKind,
    OtherLine,
    PedigreeAncestors,
    PedigreeDBLine,
    PedigreeLine,
    PedigreeOriginal,
    PedigreeParents,
    PedigreeRelation,
    SampleLine,
)

__all__ = [
    "MISSING",
    "AltId",
    "AltLine",
    "AssemblyLine",
    "ColonList",
    "CommaList",
    "ContigLine",
    "DataLine",
    "Delimited",
    "FileDateLine",
    "FilterLine",
    "FilterList",
    "FormatLine",
    "FormatValueType",
    "Header",
    "HeaderLine",
    "HeaderLineBase",
    "InfoLine",
    "InfoValueType",
    "KnownAltId",
    "MetaLine",
    "Number",
    "NumberKind",
    "OtherLine",
    "PedigreeAncestors",
    "PedigreeDBLine",
    "PedigreeLine",
    "PedigreeOriginal",
    "PedigreeParents",
    "PedigreeRelation",
    "SampleLine",
    "SemicolonList",
]
