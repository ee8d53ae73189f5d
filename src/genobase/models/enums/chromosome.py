from enum import Enum
from typing import Any, Optional


class Chromosome(str, Enum):
    """
    One of the standard human contigs: the 22 autosomes, the sex chromosomes, mitochondrial DNA
    and the two pseudoautosomal regions (homologous stretches of X and Y on which a single variant
    has to be represented on both sex chromosomes).

    Chromosomes are totally ordered: autosomes numerically, then X, Y, MT, PAR and PAR2.

    >>> Chromosome("chr2") < Chromosome("10") < Chromosome.chrX
    True
    >>> Chromosome("chrM")
    <Chromosome.chrMT: 'MT'>
    """

    chr1 = "1"
    chr2 = "2"
    chr3 = "3"
    chr4 = "4"
    chr5 = "5"
    chr6 = "6"
    chr7 = "7"
    chr8 = "8"
    chr9 = "9"
    chr10 = "10"
    chr11 = "11"
    chr12 = "12"
    chr13 = "13"
    chr14 = "14"
    chr15 = "15"
    chr16 = "16"
    chr17 = "17"
    chr18 = "18"
    chr19 = "19"
    chr20 = "20"
    chr21 = "21"
    chr22 = "22"
    chrX = "X"
    chrY = "Y"
    chrMT = "MT"
    chrPAR = "PAR"
    chrPAR2 = "PAR2"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["Chromosome"]:
        if not isinstance(value, str):
            return None

        name = value.strip()
        if name[:3].lower() == "chr":
            name = name[3:]

        name = name.upper()
        if name == "M":
            name = "MT"

        for member in cls:
            if member.value == name:
                return member

        return None

    @property
    def rank(self) -> int:
        """Position of this chromosome in the total order, starting at 1 for chromosome 1."""
        return _RANKS[self]

    def __lt__(self, other):
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {chromosome: rank for rank, chromosome in enumerate(Chromosome, start=1)}
