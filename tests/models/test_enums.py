import pytest

from genobase.models.enums.reference import Reference
from genobase.models.enums.strand import Strand


def test_reference_values():
    assert [reference.value for reference in Reference] == ["NCBI36", "GRCh37", "GRCh38", "T2T-CHM13v2.0"]


@pytest.mark.parametrize("value,expected", [("+", Strand.forward), ("-", Strand.reverse)])
def test_parse_strand(value, expected):
    assert Strand(value) is expected


def test_parse_invalid_reference():
    with pytest.raises(ValueError):
        Reference("hg19")
