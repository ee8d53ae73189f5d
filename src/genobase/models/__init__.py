from genobase.models.allele import Allele
from genobase.models.liftover_alignment import LiftoverAlignment
from genobase.models.liftover_chain import LiftoverChain
from genobase.models.variant import Variant

__all__ = [
    "Allele",
    "LiftoverAlignment",
    "LiftoverChain",
    "Variant",
]
