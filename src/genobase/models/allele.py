from sqlalchemy import CheckConstraint, Column, Enum, Float, Integer, String

from genobase.db.base import Base
from genobase.models.enums.ancestry_group import AncestryGroup


class Allele(Base):
    """
    The frequency of one allele of a variant within an ancestry group. Frequencies are stored as
    provided; nothing here aggregates them across cohorts.
    """

    __tablename__ = "allele"
    __table_args__ = (CheckConstraint("frequency >= 0 AND frequency <= 1", name="frequency_probability"),)

    # The variant RSID. Frequencies may be loaded before (or without) the variant itself.
    id = Column(Integer, primary_key=True, autoincrement=False)
    ref = Column(String, primary_key=True)
    alt = Column(String, primary_key=True)
    ancestry = Column(
        Enum(
            AncestryGroup,
            name="ancestry_group",
            create_constraint=True,
            length=3,
            native_enum=False,
            validate_strings=True,
            values_callable=lambda members: [member.value for member in members],
        ),
        primary_key=True,
    )
    frequency = Column(Float, nullable=False)
