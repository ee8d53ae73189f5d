import pytest
from sqlalchemy import delete, func, select

from genobase.lib.exceptions import NotFoundError, StorageError, ValidationError
from genobase.lib.liftover import delete_chain, get_alignment, get_chain, lift_over, store_alignments, store_chain
from genobase.models.enums.reference import Reference
from genobase.models.enums.strand import Strand
from genobase.models.liftover_alignment import LiftoverAlignment
from genobase.models.liftover_chain import LiftoverChain
from genobase.view_models.liftover import AlignmentCreate, ChainCreate

from tests.helpers.constants import (
    TEST_ALIGNMENTS,
    TEST_CHAIN,
    TEST_SAVED_CHAIN,
    TEST_SOURCE_OFFSET_IN_GAP,
    TEST_SOURCE_OFFSET_IN_SECOND_BLOCK,
)


def count_alignments(session, chain_id):
    return session.scalar(select(func.count(LiftoverAlignment.id)).where(LiftoverAlignment.chain_id == chain_id))


### Tests for store_chain and get_chain functions ###


def test_get_chain_returns_stored_chain(session, setup_liftover):
    chain = get_chain(session, Reference.GRCh37, "1", TEST_CHAIN["source_start"] + 1000)

    assert chain.id == setup_liftover
    assert chain.model_dump(exclude={"id"}) == TEST_SAVED_CHAIN


@pytest.mark.parametrize("position", [TEST_CHAIN["source_start"], TEST_CHAIN["source_end"]])
def test_get_chain_includes_interval_bounds(session, setup_liftover, position):
    assert get_chain(session, Reference.GRCh37, "1", position).id == setup_liftover


@pytest.mark.parametrize("position", [TEST_CHAIN["source_start"] - 1, TEST_CHAIN["source_end"] + 1])
def test_get_chain_outside_interval(session, setup_liftover, position):
    with pytest.raises(NotFoundError) as exc_info:
        get_chain(session, Reference.GRCh37, "1", position)

    assert exc_info.value.operation == "get_chain"
    assert exc_info.value.key == ("GRCh37", "1", position)


def test_get_chain_other_chromosome(session, setup_liftover):
    with pytest.raises(NotFoundError):
        get_chain(session, Reference.GRCh37, "2", TEST_CHAIN["source_start"] + 1000)


def test_get_chain_other_assembly(session, setup_liftover):
    with pytest.raises(NotFoundError):
        get_chain(session, Reference.GRCh38, "1", TEST_CHAIN["source_start"] + 1000)


def test_get_chain_accepts_assembly_name(session, setup_liftover):
    assert get_chain(session, "GRCh37", "1", TEST_CHAIN["source_start"]).id == setup_liftover


def test_store_chain_ignores_assembly_of_chain(session):
    chain = ChainCreate(**TEST_CHAIN, source_assembly=Reference.NCBI36)
    store_chain(session, Reference.GRCh37, chain)

    assert get_chain(session, Reference.GRCh37, "1", TEST_CHAIN["source_start"]).source_assembly is Reference.GRCh37


def test_store_chain_does_not_deduplicate(session, setup_liftover):
    chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))

    assert chain_id != setup_liftover
    assert session.scalar(select(func.count(LiftoverChain.id))) == 2


def test_get_chain_equal_scores_resolve_to_first_stored(session, setup_liftover):
    store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))

    assert get_chain(session, Reference.GRCh37, "1", TEST_CHAIN["source_start"]).id == setup_liftover


def test_get_chain_highest_score_wins(session, setup_liftover):
    better_chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**{**TEST_CHAIN, "score": 5}))
    store_chain(session, Reference.GRCh37, ChainCreate(**{**TEST_CHAIN, "score": 3}))

    assert get_chain(session, Reference.GRCh37, "1", TEST_CHAIN["source_start"]).id == better_chain_id


### Tests for store_alignments and get_alignment functions ###


def test_get_alignment_inside_second_block(session, setup_liftover):
    alignment = get_alignment(session, setup_liftover, TEST_SOURCE_OFFSET_IN_SECOND_BLOCK)

    assert alignment.chain_id == setup_liftover
    assert alignment.source_offset == TEST_ALIGNMENTS[1]["source_offset"]
    assert alignment.target_offset == TEST_ALIGNMENTS[1]["target_offset"]
    assert alignment.size == TEST_ALIGNMENTS[1]["size"]
    assert alignment.target_offset_for(TEST_SOURCE_OFFSET_IN_SECOND_BLOCK) == TEST_ALIGNMENTS[1]["target_offset"] + 63


def test_get_alignment_at_first_offset(session, setup_liftover):
    alignment = get_alignment(session, setup_liftover, 0)

    assert alignment.source_offset == 0
    assert alignment.covers(0)


def test_get_alignment_past_last_block(session, setup_liftover):
    last = TEST_ALIGNMENTS[-1]

    with pytest.raises(NotFoundError) as exc_info:
        get_alignment(session, setup_liftover, last["source_offset"] + last["size"] + 1)

    assert exc_info.value.operation == "get_alignment"


def test_get_alignment_in_gap_returns_next_block(session, setup_liftover):
    alignment = get_alignment(session, setup_liftover, TEST_SOURCE_OFFSET_IN_GAP)

    assert alignment.source_offset == TEST_ALIGNMENTS[1]["source_offset"]
    assert not alignment.covers(TEST_SOURCE_OFFSET_IN_GAP)


def test_get_alignment_before_first_block_returns_first_block(session):
    chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))
    store_alignments(session, chain_id, [AlignmentCreate(source_offset=100, target_offset=100, size=1000)])

    alignment = get_alignment(session, chain_id, 50)

    assert alignment.source_offset == 100
    assert not alignment.covers(50)


def test_get_alignment_unknown_chain(session, setup_liftover):
    with pytest.raises(NotFoundError):
        get_alignment(session, setup_liftover + 1, 0)


def test_store_alignments_attributes_blocks_to_given_chain(session, setup_liftover):
    other_chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))
    store_alignments(session, other_chain_id, [AlignmentCreate(**TEST_ALIGNMENTS[0], chain_id=setup_liftover)])

    assert count_alignments(session, other_chain_id) == 1
    assert count_alignments(session, setup_liftover) == len(TEST_ALIGNMENTS)


def test_store_alignments_is_atomic(session):
    chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))
    # Skip validation so the store's own constraint rejects the block.
    invalid = AlignmentCreate.model_construct(source_offset=300000, target_offset=300000, size=0, chain_id=None)

    with pytest.raises(StorageError) as exc_info:
        store_alignments(session, chain_id, [AlignmentCreate(**TEST_ALIGNMENTS[0]), invalid])

    assert exc_info.value.operation == "store_alignments"
    assert exc_info.value.__cause__ is not None
    assert count_alignments(session, chain_id) == 0


def test_store_alignments_empty_batch(session):
    chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))
    store_alignments(session, chain_id, [])

    assert count_alignments(session, chain_id) == 0


def test_store_alignments_unknown_chain(session):
    with pytest.raises(StorageError):
        store_alignments(session, 12345, [AlignmentCreate(**TEST_ALIGNMENTS[0])])


def test_deleting_chain_deletes_its_alignments(session, setup_liftover):
    session.execute(delete(LiftoverChain).where(LiftoverChain.id == setup_liftover))
    session.commit()

    assert count_alignments(session, setup_liftover) == 0


def test_chain_alignments_are_ordered_by_source_offset(session, setup_liftover):
    chain = session.get(LiftoverChain, setup_liftover)

    assert [alignment.source_offset for alignment in chain.alignments] == [0, TEST_ALIGNMENTS[1]["source_offset"]]


def test_store_alignments_rejects_overlapping_blocks(session):
    chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))
    overlapping = [
        AlignmentCreate(source_offset=0, target_offset=0, size=1000),
        AlignmentCreate(source_offset=500, target_offset=5000, size=1000),
    ]

    with pytest.raises(ValidationError):
        store_alignments(session, chain_id, overlapping)

    assert count_alignments(session, chain_id) == 0


def test_store_alignments_rejects_blocks_out_of_order(session):
    chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))

    with pytest.raises(ValidationError):
        store_alignments(session, chain_id, [AlignmentCreate(**alignment) for alignment in reversed(TEST_ALIGNMENTS)])

    assert count_alignments(session, chain_id) == 0


def test_store_alignments_overlap_rolls_back_earlier_batches(session, monkeypatch):
    monkeypatch.setattr("genobase.lib.liftover.WRITE_BATCH_SIZE", 1)
    chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))
    alignments = [
        AlignmentCreate(source_offset=0, target_offset=0, size=1000),
        AlignmentCreate(source_offset=2000, target_offset=2000, size=1000),
        AlignmentCreate(source_offset=2500, target_offset=5000, size=1000),
    ]

    with pytest.raises(ValidationError):
        store_alignments(session, chain_id, alignments)

    assert count_alignments(session, chain_id) == 0


def test_store_alignments_accepts_adjacent_blocks(session):
    chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))
    adjacent = [
        AlignmentCreate(source_offset=0, target_offset=0, size=1000),
        AlignmentCreate(source_offset=1000, target_offset=1500, size=1000),
    ]

    store_alignments(session, chain_id, adjacent)

    assert count_alignments(session, chain_id) == 2
    assert get_alignment(session, chain_id, 1000).target_offset_for(1000) == 1500


### Tests for delete_chain function ###


def test_delete_chain(session, setup_liftover):
    delete_chain(session, setup_liftover)

    assert count_alignments(session, setup_liftover) == 0
    with pytest.raises(NotFoundError):
        get_chain(session, Reference.GRCh37, "1", TEST_CHAIN["source_start"])


def test_delete_unknown_chain(session, setup_liftover):
    delete_chain(session, setup_liftover + 1)

    assert count_alignments(session, setup_liftover) == len(TEST_ALIGNMENTS)


### Tests for lift_over function ###


def test_lift_over_inside_block(session, setup_liftover):
    position = TEST_CHAIN["source_start"] + TEST_SOURCE_OFFSET_IN_SECOND_BLOCK
    lifted = lift_over(session, Reference.GRCh37, "1", position)

    assert lifted.chromosome == "1"
    assert lifted.position == TEST_CHAIN["target_start"] + TEST_ALIGNMENTS[1]["target_offset"] + 63
    assert lifted.strand is Strand.forward
    assert lifted.chain_id == setup_liftover
    assert lifted.chain_score == TEST_CHAIN["score"]


def test_lift_over_at_chain_start(session, setup_liftover):
    lifted = lift_over(session, Reference.GRCh37, "1", TEST_CHAIN["source_start"])

    assert lifted.position == TEST_CHAIN["target_start"]


def test_lift_over_in_gap(session, setup_liftover):
    with pytest.raises(NotFoundError) as exc_info:
        lift_over(session, Reference.GRCh37, "1", TEST_CHAIN["source_start"] + TEST_SOURCE_OFFSET_IN_GAP)

    assert exc_info.value.operation == "lift_over"


def test_lift_over_before_first_block(session):
    chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))
    store_alignments(session, chain_id, [AlignmentCreate(source_offset=100, target_offset=100, size=1000)])

    with pytest.raises(NotFoundError):
        lift_over(session, Reference.GRCh37, "1", TEST_CHAIN["source_start"] + 50)


def test_lift_over_without_chain(session, setup_liftover):
    with pytest.raises(NotFoundError) as exc_info:
        lift_over(session, Reference.GRCh37, "1", 5)

    assert exc_info.value.operation == "get_chain"


def test_lift_over_reverse_strand_target(session):
    chain = ChainCreate(**{**TEST_CHAIN, "target_strand": Strand.reverse})
    chain_id = store_chain(session, Reference.GRCh37, chain)
    store_alignments(session, chain_id, [AlignmentCreate(**alignment) for alignment in TEST_ALIGNMENTS])

    lifted = lift_over(session, Reference.GRCh37, "1", TEST_CHAIN["source_start"] + 5)

    assert lifted.strand is Strand.reverse
    assert lifted.position == TEST_CHAIN["target_size"] - 1 - (TEST_CHAIN["target_start"] + 5)
