from genobase.lib.exceptions import ValidationError
from genobase.models.enums.chromosome import Chromosome
from genobase.models.enums.reference import Reference

# Lengths in bases. The pseudoautosomal regions are measured on chromosome X:
# PAR1 is X:10,001-2,781,479 and PAR2 is X:155,701,383-156,030,895.
GRCH38_CHROMOSOME_LENGTHS: dict[Chromosome, int] = {
    Chromosome.chr1: 248_956_422,
    Chromosome.chr2: 242_193_529,
    Chromosome.chr3: 198_295_559,
    Chromosome.chr4: 190_214_555,
    Chromosome.chr5: 181_538_259,
    Chromosome.chr6: 170_805_979,
    Chromosome.chr7: 159_345_973,
    Chromosome.chr8: 145_138_636,
    Chromosome.chr9: 138_394_717,
    Chromosome.chr10: 133_797_422,
    Chromosome.chr11: 135_086_622,
    Chromosome.chr12: 133_275_309,
    Chromosome.chr13: 114_364_328,
    Chromosome.chr14: 107_043_718,
    Chromosome.chr15: 101_991_189,
    Chromosome.chr16: 90_338_345,
    Chromosome.chr17: 83_257_441,
    Chromosome.chr18: 80_373_285,
    Chromosome.chr19: 58_617_616,
    Chromosome.chr20: 64_444_167,
    Chromosome.chr21: 46_709_983,
    Chromosome.chr22: 50_818_468,
    Chromosome.chrX: 156_040_895,
    Chromosome.chrY: 57_227_415,
    Chromosome.chrMT: 16_569,
    Chromosome.chrPAR: 2_771_479,
    Chromosome.chrPAR2: 329_513,
}

CHROMOSOME_LENGTHS: dict[Reference, dict[Chromosome, int]] = {
    Reference.GRCh38: GRCH38_CHROMOSOME_LENGTHS,
}


def chromosome_length(assembly: Reference, chromosome: Chromosome) -> int:
    """
    The length in bases of *chromosome* in *assembly*.

    Only GRCh38 lengths are known. Asking for any other assembly is a programming error and raises
    :py:class:`ValidationError`.
    """
    try:
        lengths = CHROMOSOME_LENGTHS[Reference(assembly)]
    except KeyError:
        raise ValidationError(f"Chromosome lengths are not known for assembly {assembly}.")

    return lengths[Chromosome(chromosome)]
