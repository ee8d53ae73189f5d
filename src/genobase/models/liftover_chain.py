from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, Column, Enum, Index, Integer, String
from sqlalchemy.orm import Mapped, relationship

from genobase.db.base import Base
from genobase.models.enums.reference import Reference
from genobase.models.enums.strand import Strand

if TYPE_CHECKING:
    from .liftover_alignment import LiftoverAlignment


class LiftoverChain(Base):
    """
    A chain of ungapped alignment blocks mapping an interval of a source (reference) assembly onto
    an interval of a target (query) assembly. Column names follow the UCSC chain format, in which the
    source side is called the reference and the target side the query.
    """

    __tablename__ = "liftover_chain"
    __table_args__ = (
        CheckConstraint("ref_start <= ref_end", name="ref_interval"),
        CheckConstraint("query_start <= query_end", name="query_interval"),
    )

    id = Column(Integer, primary_key=True)
    score = Column(Integer, nullable=False)

    source_assembly = Column(
        "ref",
        Enum(
            Reference,
            name="reference",
            create_constraint=True,
            length=16,
            native_enum=False,
            validate_strings=True,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )
    # Chain files may reference scaffolds outside the standard contigs, so chromosome names are free-form.
    source_chromosome = Column("ref_name", String, nullable=False)
    source_size = Column("ref_size", Integer, nullable=False)
    source_strand = Column(
        "ref_strand",
        Enum(
            Strand,
            name="ref_strand",
            create_constraint=True,
            length=1,
            native_enum=False,
            validate_strings=True,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )
    source_start = Column("ref_start", Integer, nullable=False)
    source_end = Column("ref_end", Integer, nullable=False)

    target_chromosome = Column("query_name", String, nullable=False)
    target_size = Column("query_size", Integer, nullable=False)
    target_strand = Column(
        "query_strand",
        Enum(
            Strand,
            name="query_strand",
            create_constraint=True,
            length=1,
            native_enum=False,
            validate_strings=True,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )
    target_start = Column("query_start", Integer, nullable=False)
    target_end = Column("query_end", Integer, nullable=False)

    alignments: Mapped[List["LiftoverAlignment"]] = relationship(
        "LiftoverAlignment",
        back_populates="chain",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="LiftoverAlignment.source_offset",
    )


Index(
    "ix_liftover_chain_ref_interval",
    LiftoverChain.source_assembly,
    LiftoverChain.source_chromosome,
    LiftoverChain.source_start,
    LiftoverChain.source_end,
)
