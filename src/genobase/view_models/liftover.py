from typing import Optional

from pydantic import Field, model_validator
from typing_extensions import Self

from genobase.lib.exceptions import ValidationError
from genobase.models.enums.reference import Reference
from genobase.models.enums.strand import Strand
from genobase.view_models.base.base import BaseModel


class ChainBase(BaseModel):
    score: int

    source_chromosome: str
    source_size: int = Field(gt=0)
    source_strand: Strand
    source_start: int = Field(ge=0)
    source_end: int = Field(ge=0)

    target_chromosome: str
    target_size: int = Field(gt=0)
    target_strand: Strand
    target_start: int = Field(ge=0)
    target_end: int = Field(ge=0)


class ChainCreate(ChainBase):
    """
    A chain to be stored. The source assembly it is anchored to is supplied when storing it, and
    overrides any assembly given here.
    """

    source_assembly: Optional[Reference] = None

    @model_validator(mode="after")
    def intervals_fit_their_chromosomes(self) -> Self:
        if self.source_start > self.source_end:
            raise ValidationError("The source start of a chain may not be past its source end.")
        if self.target_start > self.target_end:
            raise ValidationError("The target start of a chain may not be past its target end.")
        if self.source_end > self.source_size:
            raise ValidationError("The source interval of a chain may not extend past the source chromosome.")
        if self.target_end > self.target_size:
            raise ValidationError("The target interval of a chain may not extend past the target chromosome.")

        return self


class Chain(ChainBase):
    """A stored chain."""

    id: int
    source_assembly: Reference

    class Config:
        from_attributes = True


class AlignmentBase(BaseModel):
    source_offset: int = Field(ge=0)
    target_offset: int = Field(ge=0)
    size: int = Field(gt=0)


class AlignmentCreate(AlignmentBase):
    """
    An alignment block to be stored. Blocks are always attributed to the chain they are stored
    against, so any ``chain_id`` given here is ignored.
    """

    chain_id: Optional[int] = None


class Alignment(AlignmentBase):
    """A stored alignment block."""

    id: int
    chain_id: int

    class Config:
        from_attributes = True

    @property
    def source_end(self) -> int:
        """The first source offset past this block."""
        return self.source_offset + self.size

    def covers(self, source_offset: int) -> bool:
        """Whether *source_offset* falls inside this block, rather than in a gap next to it."""
        return self.source_offset <= source_offset < self.source_end

    def target_offset_for(self, source_offset: int) -> int:
        """
        Translate a chain-relative *source_offset* inside this block to a chain-relative target offset.
        """
        if not self.covers(source_offset):
            raise ValueError(
                f"Offset {source_offset} is outside the alignment block [{self.source_offset}, {self.source_end})."
            )

        return self.target_offset + (source_offset - self.source_offset)


class LiftedPosition(BaseModel):
    """A position translated onto the target assembly of a chain."""

    chromosome: str
    position: int
    strand: Strand
    chain_id: int
    chain_score: int
