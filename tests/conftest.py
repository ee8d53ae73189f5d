import logging  # noqa: F401
import sys

import pytest

from genobase.db.session import connect, session_factory
from genobase.lib.alleles import store_alleles
from genobase.lib.liftover import store_alignments, store_chain
from genobase.lib.variants import store_variants
from genobase.models import *  # noqa: F403
from genobase.models.enums.reference import Reference
from genobase.view_models.allele import AlleleCreate
from genobase.view_models.liftover import AlignmentCreate, ChainCreate
from genobase.view_models.variant import VariantCreate

from tests.helpers.constants import TEST_ALIGNMENTS, TEST_ALLELES, TEST_CHAIN, TEST_VARIANTS

sys.path.append(".")


@pytest.fixture()
def database_path(tmp_path):
    return str(tmp_path / "genobase.db")


@pytest.fixture()
def engine(database_path):
    # Un-comment this line to log all database queries:
    # logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    engine = connect(database_path)

    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session(engine):
    session = session_factory(engine)()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def setup_liftover(session):
    chain_id = store_chain(session, Reference.GRCh37, ChainCreate(**TEST_CHAIN))
    store_alignments(session, chain_id, [AlignmentCreate(**alignment) for alignment in TEST_ALIGNMENTS])

    return chain_id


@pytest.fixture()
def setup_variants(session):
    store_variants(session, [VariantCreate(**variant) for variant in TEST_VARIANTS])


@pytest.fixture()
def setup_alleles(session, setup_variants):
    store_alleles(session, [AlleleCreate(**allele) for allele in TEST_ALLELES])
