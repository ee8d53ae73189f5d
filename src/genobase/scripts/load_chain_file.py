"""
Load the liftover chains of a UCSC chain file into the store.

Usage:
    genobase-load-chains GRCh37 hg19ToHg38.over.chain.gz --no-sync

Chains are anchored to the source assembly given on the command line; the reference ("t") side of
the chain file is taken to be that assembly. Each chain is committed as it is loaded.
"""

import click
from sqlalchemy.orm import Session

from genobase.lib.chain_file import load_chain_file
from genobase.models.enums.reference import Reference
from genobase.scripts.environment import with_database_session


@click.command()
@with_database_session
@click.argument("assembly", type=click.Choice([reference.value for reference in Reference]))
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def main(db: Session, assembly: str, path: str) -> None:
    loaded = load_chain_file(db, Reference(assembly), path)
    click.echo(f"Loaded {loaded} chains from {path}.")


if __name__ == "__main__":  # pragma: no cover
    main()
