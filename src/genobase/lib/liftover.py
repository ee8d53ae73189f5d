"""
Storage and lookup of liftover chains, and translation of coordinates between assemblies with them.

A chain maps an interval of a source assembly onto a target assembly through a series of ungapped
alignment blocks. Translating a position takes two lookups: the chain covering the position, then
the block covering the position's offset from the start of that chain.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from genobase.lib.cancellation import CancellationToken
from genobase.lib.exceptions import NotFoundError, ValidationError
from genobase.lib.logging.context import logging_context, save_to_logging_context
from genobase.lib.store import WRITE_BATCH_SIZE, store_operation
from genobase.models.enums.reference import Reference
from genobase.models.enums.strand import Strand
from genobase.models.liftover_alignment import LiftoverAlignment
from genobase.models.liftover_chain import LiftoverChain
from genobase.view_models.liftover import Alignment, AlignmentCreate, Chain, ChainCreate, LiftedPosition

logger = logging.getLogger(__name__)


def store_chain(
    db: Session, source_assembly: Reference, chain: ChainCreate, token: Optional[CancellationToken] = None
) -> int:
    """
    Store a new *chain* anchored to *source_assembly* and return the identifier assigned to it.

    Chains are never deduplicated; storing the same chain twice creates two rows.
    """
    source_assembly = Reference(source_assembly)
    key = (source_assembly.value, chain.source_chromosome, chain.source_start, chain.source_end)

    with store_operation(db, "store_chain", key, token):
        item = LiftoverChain(**chain.model_dump(exclude={"source_assembly"}), source_assembly=source_assembly)
        db.add(item)
        db.flush()

        chain_id = item.id
        db.commit()

        save_to_logging_context({"chain_id": chain_id})
        logger.debug(msg="Stored liftover chain.", extra=logging_context())

    return chain_id


def delete_chain(db: Session, chain_id: int, token: Optional[CancellationToken] = None) -> None:
    """
    Delete chain *chain_id* along with its alignment blocks. Deleting an unknown chain is a no-op.
    """
    with store_operation(db, "delete_chain", chain_id, token):
        db.execute(delete(LiftoverChain).where(LiftoverChain.id == chain_id))
        db.commit()

        logger.debug(msg="Deleted liftover chain.", extra=logging_context())


def store_alignments(
    db: Session, chain_id: int, alignments: Iterable[AlignmentCreate], token: Optional[CancellationToken] = None
) -> None:
    """
    Store the alignment blocks of chain *chain_id* in a single transaction.

    Every block is attributed to *chain_id*, whatever chain it names itself. Blocks must be given in order
    of their source offset and may not overlap; otherwise :py:class:`ValidationError` is raised. Either the
    whole batch is stored or, on any failure or cancellation, none of it is.
    """
    with store_operation(db, "store_alignments", chain_id, token):
        stored = 0
        batch: list[LiftoverAlignment] = []
        previous_end = 0

        for alignment in alignments:
            if alignment.source_offset < previous_end:
                raise ValidationError(
                    f"Alignment block at source offset {alignment.source_offset} of chain {chain_id} overlaps or "
                    f"precedes the block ending at {previous_end}."
                )
            previous_end = alignment.source_offset + alignment.size

            batch.append(LiftoverAlignment(**alignment.model_dump(exclude={"chain_id"}), chain_id=chain_id))

            if len(batch) >= WRITE_BATCH_SIZE:
                stored += _flush_alignments(db, batch, token)
                batch = []

        stored += _flush_alignments(db, batch, token)
        db.commit()

        save_to_logging_context({"num_alignments_stored": stored})
        logger.debug(msg="Stored liftover alignments.", extra=logging_context())


def _flush_alignments(db: Session, batch: list[LiftoverAlignment], token: Optional[CancellationToken]) -> int:
    if token is not None:
        token.raise_if_cancelled("store_alignments")

    db.add_all(batch)
    db.flush()
    return len(batch)


def get_chain(
    db: Session,
    source_assembly: Reference,
    chromosome: str,
    position: int,
    token: Optional[CancellationToken] = None,
) -> Chain:
    """
    Find a chain anchored to *source_assembly* whose source interval on *chromosome* contains
    *position*, bounds included.

    When chains overlap, the one with the highest score wins, and chains of equal score resolve to the
    one stored first.
    """
    source_assembly = Reference(source_assembly)
    key = (source_assembly.value, chromosome, position)

    with store_operation(db, "get_chain", key, token):
        item = db.scalars(
            select(LiftoverChain)
            .where(
                LiftoverChain.source_assembly == source_assembly,
                LiftoverChain.source_chromosome == chromosome,
                LiftoverChain.source_start <= position,
                LiftoverChain.source_end >= position,
            )
            .order_by(LiftoverChain.score.desc(), LiftoverChain.id.asc())
            .limit(1)
        ).one_or_none()

        if item is None:
            logger.debug(msg="No liftover chain covers the requested position.", extra=logging_context())
            raise NotFoundError(
                "get_chain", key, f"no chain on {source_assembly.value} {chromosome} covers {position}"
            )

        return Chain.model_validate(item)


def get_alignment(
    db: Session, chain_id: int, source_offset: int, token: Optional[CancellationToken] = None
) -> Alignment:
    """
    Find the first alignment block of chain *chain_id* that ends at or past *source_offset*.

    This is not a containment check. An offset in the gap between two blocks resolves to the block
    after the gap, and an offset before the first block resolves to the first block. Use
    :py:meth:`Alignment.covers` to tell an exact hit from a gap, or :py:func:`lift_over` which does.
    """
    key = (chain_id, source_offset)

    with store_operation(db, "get_alignment", key, token):
        item = db.scalars(
            select(LiftoverAlignment)
            .where(
                LiftoverAlignment.chain_id == chain_id,
                LiftoverAlignment.source_offset + LiftoverAlignment.size >= source_offset,
            )
            .order_by(LiftoverAlignment.source_offset.asc())
            .limit(1)
        ).one_or_none()

        if item is None:
            logger.debug(msg="Offset lies past the last alignment block of the chain.", extra=logging_context())
            raise NotFoundError(
                "get_alignment", key, f"chain {chain_id} has no alignment block at or past {source_offset}"
            )

        return Alignment.model_validate(item)


def lift_over(
    db: Session,
    source_assembly: Reference,
    chromosome: str,
    position: int,
    token: Optional[CancellationToken] = None,
) -> LiftedPosition:
    """
    Translate *position* on *chromosome* of *source_assembly* onto the target assembly of the chain
    covering it.

    Positions are in the coordinate system of the stored chains. Positions in an unaligned gap, either
    between two blocks or before the first block of the chain, cannot be translated and raise
    :py:class:`NotFoundError`, as do positions no chain covers. On a reverse strand target, the result
    is converted to a forward strand coordinate.
    """
    source_assembly = Reference(source_assembly)
    chain = get_chain(db, source_assembly, chromosome, position, token=token)

    source_offset = position - chain.source_start
    alignment = get_alignment(db, chain.id, source_offset, token=token)

    if not alignment.covers(source_offset):
        raise NotFoundError(
            "lift_over",
            (source_assembly.value, chromosome, position),
            f"{source_assembly.value} {chromosome}:{position} falls in an unaligned gap of chain {chain.id}",
        )

    target_position = chain.target_start + alignment.target_offset_for(source_offset)
    if chain.target_strand is Strand.reverse:
        target_position = chain.target_size - 1 - target_position

    return LiftedPosition(
        chromosome=chain.target_chromosome,
        position=target_position,
        strand=chain.target_strand,
        chain_id=chain.id,
        chain_score=chain.score,
    )
