import pytest
from pydantic import ValidationError

from genobase.models.enums.reference import Reference
from genobase.models.enums.strand import Strand
from genobase.view_models.liftover import Alignment, AlignmentCreate, Chain, ChainCreate, LiftedPosition

from tests.helpers.constants import TEST_ALIGNMENTS, TEST_CHAIN, TEST_SAVED_CHAIN
from tests.helpers.util.common import dummy_attributed_object_from_dict


### Tests for ChainCreate view model ###


def test_create_chain():
    chain = ChainCreate(**TEST_CHAIN)

    assert chain.source_assembly is None
    assert chain.source_strand is Strand.forward


def test_create_chain_from_camelized_names():
    chain = ChainCreate(
        score=1,
        sourceChromosome="1",
        sourceSize=100,
        sourceStrand="+",
        sourceStart=0,
        sourceEnd=100,
        targetChromosome="1",
        targetSize=100,
        targetStrand="-",
        targetStart=0,
        targetEnd=100,
    )

    assert chain.target_strand is Strand.reverse


@pytest.mark.parametrize(
    "changes",
    [
        {"source_start": 300000},
        {"target_start": 300000},
        {"source_end": TEST_CHAIN["source_size"] + 1},
        {"target_end": TEST_CHAIN["target_size"] + 1},
        {"source_size": 0},
        {"source_start": -1},
        {"target_strand": "*"},
    ],
)
def test_cannot_create_invalid_chain(changes):
    with pytest.raises(ValidationError):
        ChainCreate(**{**TEST_CHAIN, **changes})


def test_chains_are_immutable():
    chain = ChainCreate(**TEST_CHAIN)

    with pytest.raises(ValidationError):
        chain.score = 2


### Tests for Chain view model ###


def test_saved_chain_from_attributes():
    chain = Chain.model_validate(dummy_attributed_object_from_dict({**TEST_SAVED_CHAIN, "id": 1}))

    assert chain.id == 1
    assert chain.source_assembly is Reference.GRCh37


### Tests for Alignment view models ###


@pytest.mark.parametrize("changes", [{"size": 0}, {"source_offset": -1}, {"target_offset": -1}])
def test_cannot_create_invalid_alignment(changes):
    with pytest.raises(ValidationError):
        AlignmentCreate(**{**TEST_ALIGNMENTS[0], **changes})


def test_alignment_covers_half_open_block():
    alignment = Alignment(**TEST_ALIGNMENTS[1], id=2, chain_id=1)

    assert alignment.source_end == TEST_ALIGNMENTS[1]["source_offset"] + TEST_ALIGNMENTS[1]["size"]
    assert alignment.covers(alignment.source_offset)
    assert alignment.covers(alignment.source_end - 1)
    assert not alignment.covers(alignment.source_end)
    assert not alignment.covers(alignment.source_offset - 1)


def test_alignment_target_offset_for():
    alignment = Alignment(**TEST_ALIGNMENTS[1], id=2, chain_id=1)

    assert alignment.target_offset_for(217480) == TEST_ALIGNMENTS[1]["target_offset"] + 63


def test_alignment_target_offset_for_uncovered_offset():
    alignment = Alignment(**TEST_ALIGNMENTS[1], id=2, chain_id=1)

    with pytest.raises(ValueError):
        alignment.target_offset_for(alignment.source_end)


def test_lifted_position_serializes_with_camelized_names():
    lifted = LiftedPosition(chromosome="1", position=257729, strand=Strand.forward, chain_id=1, chain_score=1)

    assert lifted.model_dump(by_alias=True) == {
        "chromosome": "1",
        "position": 257729,
        "strand": Strand.forward,
        "chainId": 1,
        "chainScore": 1,
    }
