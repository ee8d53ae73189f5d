"""
Translate a position between assemblies with the stored liftover chains.

Usage:
    genobase-lift GRCh37 1 217480

Prints the chromosome, position and strand of the translated position, tab separated. The store is
opened read-only, so this may run alongside other readers.
"""

import click
from sqlalchemy.orm import Session

from genobase.lib.chain_file import normalize_chromosome_name
from genobase.lib.liftover import lift_over
from genobase.models.enums.reference import Reference
from genobase.scripts.environment import with_database_session


@click.command()
@with_database_session(read_only=True)
@click.argument("assembly", type=click.Choice([reference.value for reference in Reference]))
@click.argument("chromosome")
@click.argument("position", type=click.IntRange(min=0))
def main(db: Session, assembly: str, chromosome: str, position: int) -> None:
    lifted = lift_over(db, Reference(assembly), normalize_chromosome_name(chromosome), position)
    click.echo(f"{lifted.chromosome}\t{lifted.position}\t{lifted.strand.value}")


if __name__ == "__main__":  # pragma: no cover
    main()
