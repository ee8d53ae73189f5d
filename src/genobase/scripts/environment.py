"""
Environment setup for scripts.
"""

import logging
from functools import wraps

import click
from sqlalchemy.orm import configure_mappers

import genobase.logging
from genobase.db.session import DB_NO_SYNC, DB_PATH, connect, session_factory
from genobase.db.session import no_sync as no_sync_option
from genobase.db.session import read_only as read_only_option
from genobase.lib.exceptions import GenobaseError
from genobase.models import *  # noqa: F403

logger = logging.getLogger(__name__)


def configure_script_environment() -> None:
    """
    Set up the environment for a script run from the command line.

    Features:
    - Configures logging for the script.
    - Loads the SQLAlchemy data model.
    """
    genobase.logging.configure()

    # Scan all our model classes and create backref attributes. Otherwise, these attributes only get added to classes
    # once an instance of the related class has been created.
    configure_mappers()


def with_database_session(command=None, *, read_only: bool = False):
    """
    Decorator to provide a database session and error handling for a *command*.

    The decorator sits between :py:func:`click.command` and the *command* function.

    The decorated *command* is called with a ``db`` keyword argument holding a session against the store
    named by the new ``--database`` option, which defaults to ``GENOBASE_DB_PATH``. Repository operations
    commit their own work, so the session is simply closed once the command returns.

    >>> @click.command
    ... @with_database_session
    ... def cmd(db: Session):
    ...     pass

    If the keyword-only argument *read_only* is ``True``, the store is opened read-only and schema
    migrations are skipped. Otherwise a ``--no-sync`` option is added to speed up bulk writes.

    >>> @click.command
    ... @with_database_session(read_only = True)
    ... def cmd(db: Session):
    ...     pass

    Errors raised by Genobase are reported as a :py:class:`click.ClickException`, so the command exits
    with a non-zero status.
    """

    def decorator(command):
        @click.option(
            "--database",
            help="Path of the SQLite store",
            type=click.Path(dir_okay=False),
            default=DB_PATH,
            show_default=True,
        )
        @wraps(command)
        def decorated(*args, database: str, no_sync: bool = False, **kwargs):
            configure_script_environment()

            options = []
            if read_only:
                options.append(read_only_option)
            if no_sync:
                options.append(no_sync_option)

            engine = connect(database, *options)
            db = session_factory(engine)()
            kwargs["db"] = db

            try:
                command(*args, **kwargs)

            except GenobaseError as error:
                logger.error(f"Aborting with error: {error}")
                raise click.ClickException(str(error)) from error

            finally:
                db.close()
                engine.dispose()

        if read_only:
            return decorated

        return click.option(
            "--no-sync",
            help="Disable journaling and syncing to disk; faster, but unsafe if interrupted",
            is_flag=True,
            default=DB_NO_SYNC,
        )(decorated)

    return decorator(command) if command else decorator

