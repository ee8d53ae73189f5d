from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, relationship

from genobase.db.base import Base

if TYPE_CHECKING:
    from .liftover_chain import LiftoverChain


class LiftoverAlignment(Base):
    """
    An ungapped alignment block. Offsets are relative to the start of the owning chain on either side.
    """

    __tablename__ = "liftover_alignment"
    __table_args__ = (
        CheckConstraint("size > 0", name="positive_size"),
        CheckConstraint("ref_offset >= 0 AND query_offset >= 0", name="non_negative_offsets"),
    )

    id = Column(Integer, primary_key=True)

    chain_id = Column(Integer, ForeignKey("liftover_chain.id", ondelete="CASCADE"), nullable=False)
    chain: Mapped["LiftoverChain"] = relationship("LiftoverChain", back_populates="alignments")

    source_offset = Column("ref_offset", Integer, nullable=False)
    target_offset = Column("query_offset", Integer, nullable=False)
    size = Column(Integer, nullable=False)


Index("ix_liftover_alignment_chain_offset", LiftoverAlignment.chain_id, LiftoverAlignment.source_offset)
