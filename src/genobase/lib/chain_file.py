"""
Reading of UCSC chain files into liftover chains.

A chain file is a series of chains, each a header line followed by its alignment blocks::

    chain 1 chr1 249250621 + 10000 267719 chr1 248956422 + 10000 297968 2
    167417 50000 80249
    40302

Every block line but the last of a chain gives the size of an ungapped block, then the gaps to the
next block on the reference ("t") and query ("q") sides. The last block line gives only a size, and a
blank line ends the chain. The reference side of a chain file is the source of a liftover, and the
query side its target.

See http://genome.ucsc.edu/goldenPath/help/chain.html for the format.
"""

import gzip
import logging
from pathlib import Path
from typing import IO, Iterable, Iterator, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from genobase.lib.cancellation import CancellationToken
from genobase.lib.exceptions import ChainFileError, GenobaseError, ValidationError
from genobase.lib.liftover import delete_chain, store_alignments, store_chain
from genobase.lib.logging.context import logging_context, logging_context_scope, save_to_logging_context
from genobase.models.enums.chromosome import Chromosome
from genobase.models.enums.reference import Reference
from genobase.view_models.liftover import AlignmentCreate, ChainCreate

logger = logging.getLogger(__name__)

ParsedChain = tuple[ChainCreate, list[AlignmentCreate]]


def normalize_chromosome_name(name: str) -> str:
    """
    Normalize the name of a standard contig to its canonical form, and leave any other name as is.

    >>> normalize_chromosome_name("chrM")
    'MT'
    >>> normalize_chromosome_name("chr1_KI270706v1_random")
    'chr1_KI270706v1_random'
    """
    try:
        return Chromosome(name).value
    except ValueError:
        return name


def _parse_header(fields: list[str], line_number: int) -> ChainCreate:
    if len(fields) not in (12, 13):
        raise ChainFileError(f"expected a chain header of 12 or 13 fields, got {len(fields)}", line_number)

    _, score, t_name, t_size, t_strand, t_start, t_end, q_name, q_size, q_strand, q_start, q_end = fields[:12]

    try:
        return ChainCreate(
            score=int(score),
            source_chromosome=normalize_chromosome_name(t_name),
            source_size=int(t_size),
            source_strand=t_strand,
            source_start=int(t_start),
            source_end=int(t_end),
            target_chromosome=normalize_chromosome_name(q_name),
            target_size=int(q_size),
            target_strand=q_strand,
            target_start=int(q_start),
            target_end=int(q_end),
        )
    except (ValueError, PydanticValidationError, ValidationError) as e:
        raise ChainFileError(f"invalid chain header: {e}", line_number) from e


def _parse_block_line(fields: list[str], line_number: int) -> tuple[int, int, int]:
    if len(fields) not in (1, 3):
        raise ChainFileError(f"expected an alignment block of 1 or 3 fields, got {len(fields)}", line_number)

    try:
        values = [int(field) for field in fields]
    except ValueError as e:
        raise ChainFileError(f"invalid alignment block: {e}", line_number) from e

    if values[0] <= 0 or any(value < 0 for value in values[1:]):
        raise ChainFileError("alignment block sizes must be positive and gaps non-negative", line_number)

    if len(values) == 1:
        return values[0], 0, 0

    return values[0], values[1], values[2]


def parse_chains(lines: Iterable[str]) -> Iterator[ParsedChain]:
    """
    Parse chains and their alignment blocks from the lines of a chain file.

    Block offsets are relative to the start of their chain on each side. Comment lines, starting with
    ``#``, are skipped.
    """
    chain: Optional[ChainCreate] = None
    alignments: list[AlignmentCreate] = []
    source_offset = target_offset = 0
    complete = False

    for line_number, line in enumerate(lines, start=1):
        fields = line.split()

        if not fields or fields[0].startswith("#"):
            if chain is not None and complete:
                yield chain, alignments
                chain = None
            continue

        if fields[0] == "chain":
            if chain is not None:
                if not complete:
                    raise ChainFileError("chain ended before its last alignment block", line_number)
                yield chain, alignments

            chain = _parse_header(fields, line_number)
            alignments = []
            source_offset = target_offset = 0
            complete = False
            continue

        if chain is None or complete:
            raise ChainFileError("alignment block outside of a chain", line_number)

        size, source_gap, target_gap = _parse_block_line(fields, line_number)
        alignments.append(AlignmentCreate(source_offset=source_offset, target_offset=target_offset, size=size))

        source_offset += size + source_gap
        target_offset += size + target_gap
        complete = len(fields) == 1

        if complete and (
            chain.source_start + source_offset != chain.source_end
            or chain.target_start + target_offset != chain.target_end
        ):
            raise ChainFileError("alignment blocks do not span the chain", line_number)

    if chain is not None:
        if not complete:
            raise ChainFileError("file ended before the last alignment block of a chain")
        yield chain, alignments


def _open(path: Path) -> IO[str]:
    if path.suffix == ".gz":
        return gzip.open(path, "rt")

    return open(path)


def read_chain_file(path: Union[str, Path]) -> Iterator[ParsedChain]:
    """Parse the chain file at *path*, which may be gzip compressed."""
    with _open(Path(path)) as f:
        yield from parse_chains(f)


def load_chain_file(
    db: Session, source_assembly: Reference, path: Union[str, Path], token: Optional[CancellationToken] = None
) -> int:
    """
    Store every chain in the chain file at *path*, anchored to *source_assembly*, along with its alignment
    blocks. Returns the number of chains stored.

    Each chain is committed along with its blocks. A chain whose blocks cannot be stored is deleted again,
    and a failure part way through the file leaves the chains before it in place.
    """
    source_assembly = Reference(source_assembly)
    loaded = 0

    with logging_context_scope(**{**logging_context(), "source_assembly": source_assembly.value, "path": str(path)}):
        logger.info(msg="Loading chain file.", extra=logging_context())

        for chain, alignments in read_chain_file(path):
            if token is not None:
                token.raise_if_cancelled("load_chain_file")

            chain_id = store_chain(db, source_assembly, chain, token=token)
            try:
                store_alignments(db, chain_id, alignments, token=token)
            except GenobaseError:
                # A chain without blocks would shadow other chains covering the same positions.
                delete_chain(db, chain_id)
                raise
            loaded += 1

        save_to_logging_context({"num_chains_loaded": loaded})
        logger.info(msg="Loaded chain file.", extra=logging_context())

    return loaded
