import logging
import os
from pathlib import Path
from typing import Callable, Optional

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)

# An option transforms the URL the store is opened with.
Option = Callable[[URL], URL]

DB_PATH = os.getenv("GENOBASE_DB_PATH") or "genobase.db"
DB_READ_ONLY = (os.getenv("GENOBASE_READ_ONLY") or "false").lower() == "true"
DB_NO_SYNC = (os.getenv("GENOBASE_NO_SYNC") or "false").lower() == "true"

MIGRATIONS_PATH = Path(__file__).parent.parent / "migrations"

# Query parameters interpreted by Genobase itself, rather than passed on to SQLite.
PRAGMA_PARAMETERS = ("journal_mode", "synchronous")


def read_only(url: URL) -> URL:
    """
    Opens the store read-only, allowing for multiple concurrent readers.
    """
    database = url.database or ""
    if not database.startswith("file:"):
        database = f"file:{database}"

    return url.set(database=database).update_query_dict({"mode": "ro", "uri": "true"})


def no_sync(url: URL) -> URL:
    """
    Disables journaling and flushing the store to disk after each write.
    This is unsafe, but significantly speeds up bulk imports.
    """
    return url.update_query_dict({"journal_mode": "OFF", "synchronous": "OFF"})


def database_url(path: Optional[str] = None, *options: Option) -> URL:
    """
    Build the URL of the store at *path*, transformed by each of *options* in turn.

    An empty *path* refers to a private in-memory store, which is mostly useful for testing.
    """
    url = make_url(f"sqlite:///{path}" if path else "sqlite://")

    for option in options:
        url = option(url)

    return url


def is_read_only(url: URL) -> bool:
    return url.query.get("mode") == "ro"


def connect(path: Optional[str] = None, *options: Option) -> Engine:
    """
    Open the store at *path* and apply any outstanding schema migrations.

    Migrations are skipped when the store is opened with :py:func:`read_only`.
    """
    url = database_url(path, *options)

    pragmas = {name: url.query[name] for name in PRAGMA_PARAMETERS if name in url.query}
    engine = create_engine(url.difference_update_query(PRAGMA_PARAMETERS))

    @event.listens_for(engine, "connect")
    def configure_connection(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        try:
            # SQLite only enforces foreign keys, and so cascading deletes, when asked to.
            cursor.execute("PRAGMA foreign_keys=ON")
            for name, value in pragmas.items():
                cursor.execute(f"PRAGMA {name}={value}")
        finally:
            cursor.close()

    if is_read_only(url):
        logger.info(msg=f"Opened {url.database or 'in-memory store'} read-only; skipping schema migrations.")
    else:
        upgrade_schema(engine)

    return engine


def upgrade_schema(engine: Engine, revision: str = "head") -> None:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))

    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, revision)

    logger.debug(msg=f"Upgraded schema to {revision}.")


def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autoflush=False, bind=engine)


def options_from_environment() -> list[Option]:
    options: list[Option] = []
    if DB_READ_ONLY:
        options.append(read_only)
    if DB_NO_SYNC:
        options.append(no_sync)

    return options

