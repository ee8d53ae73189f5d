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
from genobase.models.allele import Allele
from genobase.models.enums.ancestry_group import AncestryGroup
from genobase.view_models import allele

logger = logging.getLogger(__name__)


def store_alleles(
    db: Session, alleles: Iterable[allele.AlleleCreate], token: Optional[CancellationToken] = None
) -> None:
    """
    Store allele frequencies in a single transaction. Storing an allele that is already known for the
    same variant and ancestry group replaces its frequency.
    """
    table = Allele.__table__
    stmt = insert(table)
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.id, table.c.ref, table.c.alt, table.c.ancestry],
        set_={"frequency": stmt.excluded.frequency},
    )

    with store_operation(db, "store_alleles", "allele", token):
        stored = 0
        for batch in batched(alleles, WRITE_BATCH_SIZE):
            if token is not None:
                token.raise_if_cancelled("store_alleles")

            db.execute(stmt, [a.model_dump() for a in batch])
            stored += len(batch)

        db.commit()

        save_to_logging_context({"num_alleles_stored": stored})
        logger.debug(msg="Stored alleles.", extra=logging_context())


def get_allele(
    db: Session,
    variant_id: int,
    ref: str,
    alt: str,
    ancestry: AncestryGroup,
    token: Optional[CancellationToken] = None,
) -> allele.Allele:
    ancestry = AncestryGroup(ancestry)
    key = (variant_id, ref, alt, ancestry.value)

    with store_operation(db, "get_allele", key, token):
        item = db.scalars(
            select(Allele)
            .where(Allele.id == variant_id, Allele.ref == ref, Allele.alt == alt, Allele.ancestry == ancestry)
            .limit(1)
        ).one_or_none()

        if item is None:
            raise NotFoundError(
                "get_allele", key, f"no {ancestry.value} allele {ref}>{alt} found for rs{variant_id}"
            )

        return allele.Allele.model_validate(item)


def get_alleles(db: Session, variant_id: int, token: Optional[CancellationToken] = None) -> list[allele.Allele]:
    """
    Fetch every allele of variant *variant_id*, across all ancestry groups.
    """
    with store_operation(db, "get_alleles", variant_id, token):
        items = db.scalars(
            select(Allele).where(Allele.id == variant_id).order_by(Allele.ref, Allele.alt, Allele.ancestry)
        ).all()

        return [allele.Allele.model_validate(item) for item in items]


def known_alleles(db: Session, token: Optional[CancellationToken] = None) -> set[int]:
    """
    The RSIDs of every variant with at least one stored allele, so importers can skip them.
    """
    with store_operation(db, "known_alleles", "allele", token):
        return set(db.scalars(select(Allele.id).distinct()).all())
