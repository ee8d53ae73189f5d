import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.orm import Session

from genobase.lib.cancellation import CancellationToken
from genobase.lib.exceptions import NotFoundError
from genobase.lib.logging.context import logging_context, save_to_logging_context
from genobase.lib.store import WRITE_BATCH_SIZE, store_operation
from genobase.lib.utils import batched
from genobase.models.enums.chromosome import Chromosome
from genobase.models.variant import Variant
from genobase.view_models import variant

logger = logging.getLogger(__name__)


def store_variants(
    db: Session, variants: Iterable[variant.VariantCreate], token: Optional[CancellationToken] = None
) -> None:
    """
    Store *variants* in a single transaction. A variant whose RSID is already known replaces the
    stored one.
    """
    table = Variant.__table__
    stmt = insert(table)
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.id],
        set_={
            "chromosome": stmt.excluded.chromosome,
            "position": stmt.excluded.position,
            "class": stmt.excluded["class"],
        },
    )

    with store_operation(db, "store_variants", "variant", token):
        stored = 0
        for batch in batched(variants, WRITE_BATCH_SIZE):
            if token is not None:
                token.raise_if_cancelled("store_variants")

            db.execute(
                stmt,
                [
                    {"id": v.id, "chromosome": v.chromosome, "position": v.position, "class": v.variant_class}
                    for v in batch
                ],
            )
            stored += len(batch)

        db.commit()

        save_to_logging_context({"num_variants_stored": stored})
        logger.debug(msg="Stored variants.", extra=logging_context())


def get_variant(db: Session, variant_id: int, token: Optional[CancellationToken] = None) -> variant.Variant:
    with store_operation(db, "get_variant", variant_id, token):
        item = db.scalars(select(Variant).where(Variant.id == variant_id).limit(1)).one_or_none()

        if item is None:
            raise NotFoundError("get_variant", variant_id, f"no variant found for rs{variant_id}")

        return variant.Variant.model_validate(item)


def get_variants(
    db: Session, chromosome: Chromosome, position: int, token: Optional[CancellationToken] = None
) -> list[variant.Variant]:
    """
    Fetch every variant at *position* on *chromosome*. Finding none is not an error.
    """
    chromosome = Chromosome(chromosome)

    with store_operation(db, "get_variants", (chromosome.value, position), token):
        items = db.scalars(
            select(Variant)
            .where(Variant.chromosome == chromosome, Variant.position == position)
            .order_by(Variant.id)
        ).all()

        return [variant.Variant.model_validate(item) for item in items]
