import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from genobase.lib.cancellation import CancellationToken, observe_cancellation
from genobase.lib.exceptions import Cancelled, StorageError, ValidationError
from genobase.lib.logging.context import (
    format_raised_exception_info_as_dict,
    logging_context,
    logging_context_scope,
)

logger = logging.getLogger(__name__)

# Rows written per statement by batched writes. Cancellation is checked between batches.
WRITE_BATCH_SIZE = 500


@contextmanager
def store_operation(
    db: Session, operation: str, key: Any, token: Optional[CancellationToken] = None
) -> Iterator[dict[str, Any]]:
    """
    Run one repository operation against the store.

    Database errors roll the session back and are raised as :py:class:`StorageError`, and observed
    cancellation rolls the session back and is raised as :py:class:`Cancelled`. Invalid input detected
    part way through a write, raised as :py:class:`ValidationError`, also rolls the session back. Other
    exceptions, such as :py:class:`NotFoundError`, pass through untouched. Nothing is retried.

    The operation name and key are added to the logging context for the duration of the block.
    """
    with logging_context_scope(**{**logging_context(), "operation": operation, "key": key}) as ctx:
        try:
            with observe_cancellation(db, token, operation):
                yield ctx

        except Cancelled:
            db.rollback()
            logger.warning(msg="Operation was cancelled. Rolled back.", extra=logging_context())
            raise

        except ValidationError:
            db.rollback()
            logger.warning(msg="Operation was given invalid input. Rolled back.", extra=logging_context())
            raise

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                msg="Operation failed in the store. Rolled back.",
                extra={**logging_context(), **format_raised_exception_info_as_dict(e)},
            )
            raise StorageError(operation, key, f"{operation}: could not complete for {key!r}: {e}") from e
