from sqlalchemy import CheckConstraint, Column, Enum, Index, Integer

from genobase.db.base import Base
from genobase.models.enums.chromosome import Chromosome
from genobase.models.enums.variant_class import VariantClass


class Variant(Base):
    """A genomic variant, based on dbSNP. The primary key is the RSID without its ``rs`` prefix."""

    __tablename__ = "variant"
    __table_args__ = (CheckConstraint("position >= 0", name="non_negative_position"),)

    id = Column(Integer, primary_key=True, autoincrement=False)
    chromosome = Column(
        Enum(
            Chromosome,
            name="chromosome",
            create_constraint=True,
            length=4,
            native_enum=False,
            validate_strings=True,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )
    position = Column(Integer, nullable=False)
    variant_class = Column(
        "class",
        Enum(
            VariantClass,
            name="variant_class",
            create_constraint=True,
            length=8,
            native_enum=False,
            validate_strings=True,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )


Index("ix_variant_chromosome_position", Variant.chromosome, Variant.position)
