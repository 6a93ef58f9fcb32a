"""Tests for data line parsing and formatting."""

import pytest
from pydantic import ValidationError

from vcfio.core.body_codec import DataLineCodec, format_data_line, parse_data_line
from vcfio.errors import DataLineError
from vcfio.models import ColonList, CommaList, DataLine, FilterList, SemicolonList


def tabs(*columns):
    return "\t".join(columns)


SAMPLE_LINE = tabs(
    "20", "14370", "rs6054257", "G", "A", "29", "PASS", "NS=3;DP=14;AF=0.5;DB;H2",
    "GT:GQ:DP:HQ", "0|0:48:1:51,51", "1|0:48:8:51,51", "1/1:43:5:.,.",
)


class TestParse:
    def test_all_fields(self):
        """Test a three-sample record parses into typed columns."""
        dl = parse_data_line(SAMPLE_LINE, ["NA00001", "NA00002", "NA00003"])

        assert dl.chromosome == "20"
        assert dl.position == 14370
        assert dl.id == SemicolonList.of("rs6054257")
        assert dl.reference == "G"
        assert dl.alternative == CommaList.of("A")
        assert dl.quality == 29
        assert dl.filter == FilterList.passing()
        assert dl.info.entries == ("NS=3", "DP=14", "AF=0.5", "DB", "H2")
        assert dl.format == ColonList.of("GT", "GQ", "DP", "HQ")
        assert [s.entries for s in dl.samples] == [
            ("0|0", "48", "1", "51,51"),
            ("1|0", "48", "8", "51,51"),
            ("1/1", "43", "5", ".,."),
        ]

    def test_missing_sentinels(self):
        dl = parse_data_line(tabs("1", "100", ".", "A", ".", ".", ".", "."), [])
        assert dl.id.is_missing
        assert dl.alternative.is_missing
        assert dl.quality is None
        assert dl.filter.is_missing
        assert dl.info.is_missing
        assert dl.format is None
        assert dl.samples == []

    def test_delimited_columns_keep_order_and_duplicates(self):
        dl = parse_data_line(
            tabs("1", "100", "rs2;rs1;rs2", "C", "G,T,G", "10", "s50;q10", "AF=0.1,0.2"), []
        )
        assert dl.id.entries == ("rs2", "rs1", "rs2")
        assert dl.alternative.entries == ("G", "T", "G")
        assert dl.filter.entries == ("s50", "q10")
        assert not dl.filter.passed
        assert dl.info.entries == ("AF=0.1,0.2",)

    def test_missing_sample(self):
        dl = parse_data_line(tabs("1", "1", ".", "A", "T", ".", ".", ".", "GT", "."), ["S1"])
        assert dl.samples == [ColonList.missing()]

    def test_position_zero_is_accepted(self):
        dl = parse_data_line(tabs("1", "0", ".", "N", ".", ".", ".", "."), [])
        assert dl.position == 0


class TestColumnCount:
    @pytest.mark.parametrize(
        "columns, samples, expected, found",
        [
            (["1", "1", ".", "A", "T", ".", "."], [], 8, 7),
            (["1", "1", ".", "A", "T", ".", ".", ".", "GT"], [], 8, 9),
            (["1", "1", ".", "A", "T", ".", ".", ".", "GT"], ["S1"], 10, 9),
            (["1", "1", ".", "A", "T", ".", ".", ".", "GT", "0", "1"], ["S1"], 10, 11),
            (["1", "1", ".", "A", "T", ".", ".", "."], ["S1", "S2", "S3"], 12, 8),
            (["1", "1", ".", "A", "T", ".", ".", ".", "GT", "0", "1"], ["S1", "S2", "S3"], 12, 11),
        ],
    )
    def test_mismatch(self, columns, samples, expected, found):
        with pytest.raises(DataLineError) as exc_info:
            parse_data_line(tabs(*columns), samples)
        assert str(exc_info.value) == (
            f"invalid number of columns found, expected {expected}, found {found}"
        )

    def test_expected_columns(self):
        assert DataLineCodec.expected_columns([]) == 8
        assert DataLineCodec.expected_columns(["S1"]) == 10
        assert DataLineCodec.expected_columns(["S1", "S2", "S3"]) == 12


class TestFieldErrors:
    @pytest.mark.parametrize(
        "columns, message",
        [
            (["1", "x", ".", "A", "T", ".", ".", "."], "invalid POS value `x`"),
            (["1", "-5", ".", "A", "T", ".", ".", "."], "invalid POS value `-5`"),
            (["1", "1", ".", "A", "T", "29.5", ".", "."], "invalid QUAL value `29.5`"),
            (["1", "1", ".", "A", "T", "-1", ".", "."], "invalid QUAL value `-1`"),
            (["", "1", ".", "A", "T", ".", ".", "."], "CHROM cannot be empty"),
            (["1", "1", ".", "", "T", ".", ".", "."], "REF cannot be empty"),
            (["1", "1", "", "A", "T", ".", ".", "."], "ID cannot be empty"),
            (["1", "1", ".", "A", "T", ".", "", "."], "FILTER cannot be empty"),
            (["1", "1", ".", "A", "T,,G", ".", ".", "."], "ALT contains an empty entry"),
            (["1", "1", ".", "A", "T", ".", "q10;", "."], "FILTER contains an empty entry"),
        ],
    )
    def test_invalid_field(self, columns, message):
        with pytest.raises(DataLineError, match=message):
            parse_data_line(tabs(*columns), [])

    def test_empty_format_key(self):
        with pytest.raises(DataLineError, match="FORMAT contains an empty entry"):
            parse_data_line(tabs("1", "1", ".", "A", "T", ".", ".", ".", "GT::DP", "0"), ["S1"])


class TestFormat:
    def test_sample_line_round_trip(self):
        """Test formatting reproduces the input text exactly."""
        dl = parse_data_line(SAMPLE_LINE, ["NA00001", "NA00002", "NA00003"])
        assert format_data_line(dl) == SAMPLE_LINE
        assert str(dl) == SAMPLE_LINE

    def test_no_trailing_newline(self):
        dl = DataLine(chromosome="1", position=5, reference="A")
        assert format_data_line(dl) == tabs("1", "5", ".", "A", ".", ".", ".", ".")

    def test_built_from_models(self):
        dl = DataLine(
            chromosome="chr2",
            position=42,
            id=SemicolonList.of("rs1"),
            reference="AT",
            alternative=CommaList.of("A", "ATT"),
            quality=60,
            filter=FilterList.of("q10", "s50"),
            info=SemicolonList.of("DP=20", "SOMATIC"),
            format=ColonList.of("GT", "DP"),
            samples=[ColonList.of("0/1", "20"), ColonList.missing()],
        )
        assert str(dl) == tabs(
            "chr2", "42", "rs1", "AT", "A,ATT", "60", "q10;s50", "DP=20;SOMATIC", "GT:DP", "0/1:20", "."
        )
        assert parse_data_line(str(dl), ["S1", "S2"]) == dl


class TestAccessors:
    @pytest.fixture
    def data_line(self):
        return parse_data_line(
            tabs("20", "1234567", "microsat1", "GTC", "G,GTCT", "50", "PASS", "NS=3",
                 "GT:GQ:DP", "0/1:35:4", "0/2:.", "."),
            ["S1", "S2", "S3"],
        )

    def test_format_index(self, data_line):
        assert data_line.format_index("GT") == 0
        assert data_line.format_index("DP") == 2
        assert data_line.format_index("HQ") is None

    def test_format_index_without_format(self):
        dl = DataLine(chromosome="1", position=1, reference="A")
        assert dl.format_index("GT") is None

    def test_sample_value(self, data_line):
        assert data_line.sample_value(0, "GQ") == "35"
        assert data_line.sample_value(0, "DP") == "4"

    def test_sample_value_missing_cases(self, data_line):
        # `.` value, dropped trailing field, missing sample, unknown key
        assert data_line.sample_value(1, "GQ") is None
        assert data_line.sample_value(1, "DP") is None
        assert data_line.sample_value(2, "GT") is None
        assert data_line.sample_value(0, "HQ") is None

    @pytest.mark.parametrize("index", [-1, 3])
    def test_sample_value_index_out_of_range(self, data_line, index):
        with pytest.raises(IndexError, match="out of range for 3 samples"):
            data_line.sample_value(index, "GT")

    def test_sample_value_without_samples(self):
        dl = DataLine(chromosome="1", position=1, reference="A")
        with pytest.raises(IndexError, match="out of range for 0 samples"):
            dl.sample_value(0, "GT")


class TestModels:
    def test_filter_pass(self):
        assert FilterList.parse("PASS") == FilterList.passing()
        assert str(FilterList.passing()) == "PASS"
        assert not FilterList.passing().is_missing

    def test_filter_pass_and_entries_exclusive(self):
        with pytest.raises(ValidationError):
            FilterList(passed=True, entries=("q10",))

    def test_samples_require_format(self):
        with pytest.raises(ValidationError, match="sample columns require a FORMAT column"):
            DataLine(chromosome="1", position=1, reference="A", samples=[ColonList.of("0/1")])

    def test_negative_position_rejected(self):
        with pytest.raises(ValidationError):
            DataLine(chromosome="1", position=-1, reference="A")

    def test_delimited_needs_an_entry(self):
        with pytest.raises(ValidationError):
            ColonList(entries=())
        with pytest.raises(ValidationError):
            SemicolonList.of()

    def test_delimited_string_forms(self):
        assert str(SemicolonList.missing()) == "."
        assert str(CommaList.of("A", "C")) == "A,C"
        assert str(ColonList.of("GT", "DP")) == "GT:DP"

    def test_data_lines_compare_by_value(self):
        assert parse_data_line(SAMPLE_LINE, ["A", "B", "C"]) == parse_data_line(
            SAMPLE_LINE, ["X", "Y", "Z"]
        )
