"""Create variant, allele and liftover tables

Revision ID: 3c1d0a6f9b12
Revises:
Create Date: 2024-06-03 10:12:41.302816

"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3c1d0a6f9b12"
down_revision = None
branch_labels = None
depends_on = None

CHROMOSOMES = [str(n) for n in range(1, 23)] + ["X", "Y", "MT", "PAR", "PAR2"]
VARIANT_CLASSES = ["SNV", "INDEL", "INS", "DEL", "MNV"]
ANCESTRY_GROUPS = ["ALL", "AFR", "AMI", "AMR", "ASJ", "EAS", "FIN", "MID", "NFE", "SAS", "OTH"]
REFERENCES = ["NCBI36", "GRCh37", "GRCh38", "T2T-CHM13v2.0"]
STRANDS = ["+", "-"]


def upgrade():
    op.create_table(
        "variant",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column(
            "chromosome",
            sa.Enum(*CHROMOSOMES, name="chromosome", native_enum=False, create_constraint=True, length=4),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column(
            "class",
            sa.Enum(*VARIANT_CLASSES, name="variant_class", native_enum=False, create_constraint=True, length=8),
            nullable=False,
        ),
        sa.CheckConstraint("position >= 0", name=op.f("ck_variant_non_negative_position")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_variant")),
    )
    op.create_index("ix_variant_chromosome_position", "variant", ["chromosome", "position"], unique=False)

    op.create_table(
        "allele",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("ref", sa.String(), nullable=False),
        sa.Column("alt", sa.String(), nullable=False),
        sa.Column(
            "ancestry",
            sa.Enum(*ANCESTRY_GROUPS, name="ancestry_group", native_enum=False, create_constraint=True, length=3),
            nullable=False,
        ),
        sa.Column("frequency", sa.Float(), nullable=False),
        sa.CheckConstraint("frequency >= 0 AND frequency <= 1", name=op.f("ck_allele_frequency_probability")),
        sa.PrimaryKeyConstraint("id", "ref", "alt", "ancestry", name=op.f("pk_allele")),
    )

    op.create_table(
        "liftover_chain",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column(
            "ref",
            sa.Enum(*REFERENCES, name="reference", native_enum=False, create_constraint=True, length=16),
            nullable=False,
        ),
        sa.Column("ref_name", sa.String(), nullable=False),
        sa.Column("ref_size", sa.Integer(), nullable=False),
        sa.Column(
            "ref_strand",
            sa.Enum(*STRANDS, name="ref_strand", native_enum=False, create_constraint=True, length=1),
            nullable=False,
        ),
        sa.Column("ref_start", sa.Integer(), nullable=False),
        sa.Column("ref_end", sa.Integer(), nullable=False),
        sa.Column("query_name", sa.String(), nullable=False),
        sa.Column("query_size", sa.Integer(), nullable=False),
        sa.Column(
            "query_strand",
            sa.Enum(*STRANDS, name="query_strand", native_enum=False, create_constraint=True, length=1),
            nullable=False,
        ),
        sa.Column("query_start", sa.Integer(), nullable=False),
        sa.Column("query_end", sa.Integer(), nullable=False),
        sa.CheckConstraint("ref_start <= ref_end", name=op.f("ck_liftover_chain_ref_interval")),
        sa.CheckConstraint("query_start <= query_end", name=op.f("ck_liftover_chain_query_interval")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_liftover_chain")),
    )
    op.create_index(
        "ix_liftover_chain_ref_interval",
        "liftover_chain",
        ["ref", "ref_name", "ref_start", "ref_end"],
        unique=False,
    )

    op.create_table(
        "liftover_alignment",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("chain_id", sa.Integer(), nullable=False),
        sa.Column("ref_offset", sa.Integer(), nullable=False),
        sa.Column("query_offset", sa.Integer(), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.CheckConstraint("size > 0", name=op.f("ck_liftover_alignment_positive_size")),
        sa.CheckConstraint(
            "ref_offset >= 0 AND query_offset >= 0", name=op.f("ck_liftover_alignment_non_negative_offsets")
        ),
        sa.ForeignKeyConstraint(
            ["chain_id"],
            ["liftover_chain.id"],
            name=op.f("fk_liftover_alignment_chain_id_liftover_chain"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_liftover_alignment")),
    )
    op.create_index(
        "ix_liftover_alignment_chain_offset",
        "liftover_alignment",
        ["chain_id", "ref_offset"],
        unique=False,
    )


def downgrade():
    op.drop_index("ix_liftover_alignment_chain_offset", table_name="liftover_alignment")
    op.drop_table("liftover_alignment")
    op.drop_index("ix_liftover_chain_ref_interval", table_name="liftover_chain")
    op.drop_table("liftover_chain")
    op.drop_table("allele")
    op.drop_index("ix_variant_chromosome_position", table_name="variant")
    op.drop_table("variant")
