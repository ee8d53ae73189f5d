"""
Enums used by Genobase models.
"""

from .ancestry_group import AncestryGroup
from .chromosome import Chromosome
from .reference import Reference
from .strand import Strand
from .variant_class import VariantClass

__all__ = [
    "AncestryGroup",
    "Chromosome",
    "Reference",
    "Strand",
    "VariantClass",
]
