from functools import lru_cache
from typing import Any, Generator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from genobase.db.session import DB_PATH, connect, options_from_environment, session_factory


@lru_cache(maxsize=None)
def default_engine() -> Engine:
    return connect(DB_PATH, *options_from_environment())


def get_db() -> Generator[Session, Any, None]:
    db = session_factory(default_engine())()
    try:
        yield db
    finally:
        db.close()
