"""
Header Line Codec: `##TAG=...` text <-> HeaderLine models.

Parsing splits the line at the first `=` into a tag and a payload, tokenizes
the payload and hands the resulting mapping to the parser registered for the
tag. Formatting looks up the formatter registered for the model class.
Supporting a new tag means adding one model plus one parser and one
formatter registered here.
"""

import logging
import re
from collections.abc import Callable

from pydantic import ValidationError

from ..errors import HeaderLineError
from ..models.header import (
    AltLine,
    AssemblyLine,
    ContigLine,
    FileDateLine,
    FilterLine,
    FormatLine,
    FormatValueType,
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
from .payload import OTHER_KEY, parse_header_payload

logger = logging.getLogger(__name__)

HEADER_PREFIX = "##"

Fields = dict[str, str]
ParseFn = Callable[[Fields], HeaderLine]
FormatFn = Callable[[HeaderLine], str]

_PARSERS: dict[str, ParseFn] = {}
_FORMATTERS: dict[type[HeaderLineBase], FormatFn] = {}

# Values containing any of these cannot be written bare
_NEEDS_QUOTES = re.compile(r'[\s,"<>\[]')

ANCESTOR_PREFIX = "Name_"


def register_parser(tag: str) -> Callable[[ParseFn], ParseFn]:
    def decorator(func: ParseFn) -> ParseFn:
        _PARSERS[tag] = func
        return func

    return decorator


def register_formatter(kind: type[HeaderLineBase]) -> Callable[[FormatFn], FormatFn]:
    def decorator(func: FormatFn) -> FormatFn:
        _FORMATTERS[kind] = func
        return func

    return decorator


def known_tags() -> list[str]:
    """Tags that parse into a dedicated model (everything else is OtherLine)."""
    return list(_PARSERS)


def parse_header_line(line: str) -> HeaderLine:
    """
    Parse one header line, `##` prefix included.

    Args:
        line: The header line without its line terminator.

    Returns:
        The model for the line's tag, or an OtherLine for unknown tags.

    Raises:
        HeaderLineError: If the line lacks `=` or the `##` prefix, or a
            required key of a recognised tag is missing or invalid.
        PayloadError: If the payload of a recognised tag cannot be tokenized.
    """
    eq_index = line.find("=")
    if eq_index < 0:
        raise HeaderLineError(
            f"invalid header line `{line}`, (header lines must contain an `=` sign)"
        )

    # ##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
    #   ^^^^^^ ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^
    #   tag    payload
    tag, payload = line[:eq_index], line[eq_index + 1 :]
    if not tag.startswith(HEADER_PREFIX):
        raise HeaderLineError(
            f"invalid header type `{tag}`, (header lines must start with `{HEADER_PREFIX}`)"
        )
    tag = tag[len(HEADER_PREFIX) :]
    if not tag:
        raise HeaderLineError(f"invalid header line `{line}`, (empty header type)")

    parser = _PARSERS.get(tag)
    try:
        if parser is None:
            return _parse_other(tag, payload)
        return parser(parse_header_payload(payload))
    except ValidationError as e:
        raise HeaderLineError(f"invalid `{tag}` header line `{line}`: {e}") from e


def format_header_line(header_line: HeaderLineBase) -> str:
    """Serialize a header line model back into `##TAG=...` text."""
    formatter = _FORMATTERS.get(type(header_line))
    if formatter is None:
        raise TypeError(f"no formatter registered for {type(header_line).__name__}")
    return formatter(header_line)


# -- helpers -------------------------------------------------------------------


def _require(fields: Fields, key: str, tag: str) -> str:
    try:
        return fields[key]
    except KeyError:
        raise HeaderLineError(
            f"value not found: `{key}` is required in `{tag}` lines, got {fields}"
        ) from None


def parse_number(text: str | None) -> Number:
    """`A`, `R`, `G`, `.` or a non-negative integer; absent means unknown."""
    if text is None:
        return NumberKind.UNKNOWN
    try:
        return NumberKind(text)
    except ValueError:
        pass
    if not (text.isascii() and text.isdigit()):
        raise HeaderLineError(f"invalid Number value `{text}`")
    return int(text)


def format_number(number: Number) -> str:
    if isinstance(number, NumberKind):
        return number.value
    return str(number)


def _parse_value_type(text: str | None, enum_cls, tag: str):
    if text is None:
        return enum_cls.STRING
    try:
        return enum_cls(text)
    except ValueError:
        raise HeaderLineError(f"invalid {tag} Type value `{text}`") from None


def _parse_alt_ids(text: str) -> list:
    ids = []
    for token in text.split(":"):
        if not token:
            raise HeaderLineError(f"invalid ALT ID `{text}`, (empty value)")
        try:
            ids.append(KnownAltId(token))
        except ValueError:
            ids.append(token)
    return ids


def _quotable(value: str) -> bool:
    """True if `"value"` tokenizes back to exactly `value`."""
    escaped = False
    for ch in value:
        if ch == '"' and not escaped:
            return False
        escaped = ch == "\\" and not escaped
    # a trailing odd run of `\` would escape the closing quote
    return not escaped


def _escaped(value: str) -> str:
    chars = []
    escaped = False
    for ch in value:
        if ch == '"' and not escaped:
            chars.append("\\")
        chars.append(ch)
        escaped = ch == "\\" and not escaped
    if escaped:
        chars.append("\\")
    return "".join(chars)


def _quoted(value: str) -> str:
    """
    Enclose a value, picking the form that tokenizes back unchanged.

    Quotes are preferred. A value that cannot sit inside quotes verbatim is
    written bare if it has no special characters, else in `[...]`. Only a
    value holding both a raw `"` and a `]` has no exact form; it is escaped.
    """
    if _quotable(value):
        return f'"{value}"'
    if not _NEEDS_QUOTES.search(value):
        return value
    if "]" not in value:
        return f"[{value}]"
    return f'"{_escaped(value)}"'


def _maybe_quoted(value: str) -> str:
    return _quoted(value) if _NEEDS_QUOTES.search(value) else value


def _enum_text(value) -> str:
    return value.value if hasattr(value, "value") else str(value)


# -- per-tag parsers -----------------------------------------------------------


@register_parser("ALT")
def parse_alt(fields: Fields) -> AltLine:
    return AltLine(
        id=_parse_alt_ids(_require(fields, "ID", "ALT")),
        description=_require(fields, "Description", "ALT"),
    )


@register_parser("assembly")
def parse_assembly(fields: Fields) -> AssemblyLine:
    return AssemblyLine(url=_require(fields, OTHER_KEY, "assembly"))


@register_parser("contig")
def parse_contig(fields: Fields) -> ContigLine:
    other = {k: v for k, v in fields.items() if k not in ("ID", "species")}
    return ContigLine(
        id=_require(fields, "ID", "contig"),
        species=fields.get("species"),
        other=other,
    )


@register_parser("fileDate")
def parse_file_date(fields: Fields) -> FileDateLine:
    return FileDateLine(date=_require(fields, OTHER_KEY, "fileDate"))


@register_parser("FILTER")
def parse_filter(fields: Fields) -> FilterLine:
    return FilterLine(
        id=_require(fields, "ID", "FILTER"),
        description=_require(fields, "Description", "FILTER"),
    )


@register_parser("FORMAT")
def parse_format(fields: Fields) -> FormatLine:
    return FormatLine(
        id=_require(fields, "ID", "FORMAT"),
        number=parse_number(fields.get("Number")),
        type=_parse_value_type(fields.get("Type"), FormatValueType, "FORMAT"),
        description=_require(fields, "Description", "FORMAT"),
    )


@register_parser("INFO")
def parse_info(fields: Fields) -> InfoLine:
    return InfoLine(
        id=_require(fields, "ID", "INFO"),
        number=parse_number(fields.get("Number")),
        type=_parse_value_type(fields.get("Type"), InfoValueType, "INFO"),
        description=_require(fields, "Description", "INFO"),
        source=fields.get("Source"),
        version=fields.get("Version"),
    )


@register_parser("META")
def parse_meta(fields: Fields) -> MetaLine:
    values = _require(fields, "Values", "META")
    return MetaLine(
        id=_require(fields, "ID", "META"),
        type=_require(fields, "Type", "META"),
        number=parse_number(fields.get("Number")),
        values=[v.strip() for v in values.split(",")],
    )


@register_parser("PEDIGREE")
def parse_pedigree(fields: Fields) -> PedigreeLine:
    return PedigreeLine(
        id=_require(fields, "ID", "PEDIGREE"),
        relation=parse_pedigree_relation(fields),
    )


def parse_pedigree_relation(fields: Fields) -> PedigreeRelation:
    """
    Pick the relation shape from the keys present.

    `Original` wins over `Father`/`Mother`, which win over `Name_N` keys.
    Ancestors with a numeric suffix come first, in numeric order, then any
    other `Name_` suffixes in lexicographic order.
    """
    if "Original" in fields:
        return PedigreeOriginal(original=fields["Original"])

    if "Father" in fields or "Mother" in fields:
        return PedigreeParents(
            father=_require(fields, "Father", "PEDIGREE"),
            mother=_require(fields, "Mother", "PEDIGREE"),
        )

    if f"{ANCESTOR_PREFIX}1" in fields:
        ancestors = []
        for key, value in fields.items():
            if key == "ID":
                continue
            if not key.startswith(ANCESTOR_PREFIX):
                raise HeaderLineError(f"invalid pedigree type name `{key}`")
            ancestors.append((_ancestor_order(key[len(ANCESTOR_PREFIX) :]), value))
        ancestors.sort(key=lambda item: item[0])
        return PedigreeAncestors(ancestors=[value for _, value in ancestors])

    raise HeaderLineError(f"invalid pedigree type: {fields}")


def _ancestor_order(suffix: str) -> tuple:
    if suffix.isascii() and suffix.isdigit():
        return (0, int(suffix), "")
    return (1, 0, suffix)


@register_parser("pedigreeDB")
def parse_pedigree_db(fields: Fields) -> PedigreeDBLine:
    return PedigreeDBLine(url=_require(fields, OTHER_KEY, "pedigreeDB"))


@register_parser("SAMPLE")
def parse_sample(fields: Fields) -> SampleLine:
    meta = {
        k: v.split(";") for k, v in fields.items() if k not in ("ID", "Description", "DOI")
    }
    return SampleLine(
        id=_require(fields, "ID", "SAMPLE"),
        meta=meta,
        description=_require(fields, "Description", "SAMPLE"),
        doi=fields.get("DOI"),
    )


def _parse_other(tag: str, payload: str) -> OtherLine:
    # Unknown payloads are opaque: they are kept verbatim, not tokenized
    if not payload:
        raise HeaderLineError(f"invalid `{tag}` header line, (empty value)")
    logger.debug("Unrecognised header tag `%s`, keeping it verbatim", tag)
    return OtherLine(key=tag, value=payload)


# -- per-kind formatters -------------------------------------------------------


@register_formatter(AltLine)
def format_alt(line: AltLine) -> str:
    ids = ":".join(_enum_text(i) for i in line.id)
    return f"##ALT=<ID={_maybe_quoted(ids)},Description={_quoted(line.description)}>"


@register_formatter(AssemblyLine)
def format_assembly(line: AssemblyLine) -> str:
    return f"##assembly={line.url}"


@register_formatter(ContigLine)
def format_contig(line: ContigLine) -> str:
    parts = [f"ID={_maybe_quoted(line.id)}"]
    if line.species is not None:
        parts.append(f"species={_quoted(line.species)}")
    parts.extend(f"{k}={_maybe_quoted(v)}" for k, v in line.other.items())
    return f"##contig=<{','.join(parts)}>"


@register_formatter(FileDateLine)
def format_file_date(line: FileDateLine) -> str:
    return f"##fileDate={line.date}"


@register_formatter(FilterLine)
def format_filter(line: FilterLine) -> str:
    return f"##FILTER=<ID={_maybe_quoted(line.id)},Description={_quoted(line.description)}>"


@register_formatter(FormatLine)
def format_format(line: FormatLine) -> str:
    return (
        f"##FORMAT=<ID={_maybe_quoted(line.id)},Number={format_number(line.number)},"
        f"Type={line.type.value},Description={_quoted(line.description)}>"
    )


@register_formatter(InfoLine)
def format_info(line: InfoLine) -> str:
    optional = ""
    if line.source is not None:
        optional += f",Source={_quoted(line.source)}"
    if line.version is not None:
        optional += f",Version={_quoted(line.version)}"
    return (
        f"##INFO=<ID={_maybe_quoted(line.id)},Number={format_number(line.number)},"
        f"Type={line.type.value},Description={_quoted(line.description)}{optional}>"
    )


@register_formatter(MetaLine)
def format_meta(line: MetaLine) -> str:
    values = ", ".join(line.values)
    # `]` would end a bracketed list early
    values = f"[{values}]" if "]" not in values else _quoted(values)
    return (
        f"##META=<ID={_maybe_quoted(line.id)},Type={_maybe_quoted(line.type)},"
        f"Number={format_number(line.number)},Values={values}>"
    )


@register_formatter(PedigreeLine)
def format_pedigree(line: PedigreeLine) -> str:
    relation = line.relation
    if isinstance(relation, PedigreeOriginal):
        body = f"Original={_maybe_quoted(relation.original)}"
    elif isinstance(relation, PedigreeParents):
        body = (
            f"Father={_maybe_quoted(relation.father)},"
            f"Mother={_maybe_quoted(relation.mother)}"
        )
    else:
        body = ",".join(
            f"{ANCESTOR_PREFIX}{n}={_maybe_quoted(ancestor)}"
            for n, ancestor in enumerate(relation.ancestors, start=1)
        )
    return f"##PEDIGREE=<ID={_maybe_quoted(line.id)},{body}>"


@register_formatter(PedigreeDBLine)
def format_pedigree_db(line: PedigreeDBLine) -> str:
    return f"##pedigreeDB={line.url}"


@register_formatter(SampleLine)
def format_sample(line: SampleLine) -> str:
    parts = [f"ID={_maybe_quoted(line.id)}"]
    parts.extend(f"{k}={_maybe_quoted(';'.join(v))}" for k, v in line.meta.items())
    parts.append(f"Description={_quoted(line.description)}")
    if line.doi is not None:
        parts.append(f"DOI={_maybe_quoted(line.doi)}")
    return f"##SAMPLE=<{','.join(parts)}>"


@register_formatter(OtherLine)
def format_other(line: OtherLine) -> str:
    return f"##{line.key}={line.value}"
