"""Pytest configuration and fixtures."""

import sys
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src directory to path so tests use local code, not installed package
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

TESTDATA = Path(__file__).parent / "testdata"


def tabs(*columns: str) -> str:
    """Join columns into one tab-delimited line."""
    return "\t".join(columns)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_vcf() -> Path:
    """Three-sample VCF 4.2 file with every common header kind."""
    return TESTDATA / "small-4.2.vcf"


@pytest.fixture
def minimal_vcf_text() -> str:
    """Version, one INFO, one FILTER, one sample and one record."""
    return "\n".join(
        [
            "##fileformat=VCFv4.3",
            '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total Depth">',
            '##FILTER=<ID=q10,Description="Quality below 10">',
            tabs("#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO", "FORMAT", "NA00001"),
            tabs("20", "14370", "rs6054257", "G", "A", "29", "PASS", "DP=14", "GT:DP", "0|1:14"),
        ]
    )


@pytest.fixture
def sites_only_vcf_text() -> str:
    """A VCF without FORMAT or sample columns."""
    return "\n".join(
        [
            "##fileformat=VCFv4.2",
            tabs("#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO"),
            tabs("1", "100", ".", "A", "T", ".", ".", "."),
            tabs("1", "200", "rs1;rs2", "C", "G,T", "10", "q10;s50", "AF=0.1,0.2"),
        ]
    )
