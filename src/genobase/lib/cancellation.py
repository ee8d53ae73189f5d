import threading
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from genobase.lib.exceptions import Cancelled

# Number of SQLite virtual machine instructions between cancellation checks.
PROGRESS_HANDLER_INSTRUCTIONS = 1000


class CancellationToken:
    """
    A caller-supplied signal that an operation should stop.

    A token is cancelled once :py:meth:`cancel` has been called or, if a *timeout* (in seconds)
    was given, once that much time has passed since the token was created. Tokens may be shared
    between threads.

    >>> token = CancellationToken()
    >>> token.cancelled
    False
    >>> token.cancel()
    >>> token.cancelled
    True
    """

    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True

        return self._deadline is not None and time.monotonic() >= self._deadline

    def raise_if_cancelled(self, operation: str) -> None:
        if self.cancelled:
            raise Cancelled(operation)


@contextmanager
def observe_cancellation(db: Session, token: Optional[CancellationToken], operation: str) -> Iterator[None]:
    """
    Run the enclosed store interaction so that it observes *token*.

    The token is checked on entry, and an SQLite progress handler interrupts any statement that is
    still running once the token is cancelled. Interrupted statements surface as :py:class:`Cancelled`.
    """
    if token is None:
        yield
        return

    token.raise_if_cancelled(operation)

    driver_connection = db.connection().connection.driver_connection
    driver_connection.set_progress_handler(lambda: int(token.cancelled), PROGRESS_HANDLER_INSTRUCTIONS)  # type: ignore

    try:
        yield
    except OperationalError as e:
        if token.cancelled:
            raise Cancelled(operation) from e
        raise
    finally:
        driver_connection.set_progress_handler(None, 0)  # type: ignore
