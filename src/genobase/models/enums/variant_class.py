from enum import Enum


class VariantClass(str, Enum):
    """The class of a genomic variant."""

    # Single Nucleotide Variant: a single base pair is altered.
    SNV = "SNV"
    # Insertion/deletion: a small insertion or deletion of bases.
    INDEL = "INDEL"
    # Insertion: extra base pairs are inserted into a new place in the DNA.
    INS = "INS"
    # Deletion: some base pairs are deleted from the DNA.
    DEL = "DEL"
    # Multi-Nucleotide Variant: two or more nucleotides are replaced with other nucleotides.
    MNV = "MNV"
