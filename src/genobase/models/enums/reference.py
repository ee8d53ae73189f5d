from enum import Enum


class Reference(str, Enum):
    """A reference genome assembly."""

    NCBI36 = "NCBI36"
    GRCh37 = "GRCh37"
    GRCh38 = "GRCh38"
    T2T_CHM13v2_0 = "T2T-CHM13v2.0"
