import logging
import sys
import traceback
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

from genobase import __project__, __version__

logger = logging.getLogger(__name__)

# Each thread (and each asyncio task) sees its own copy of the context.
_logging_context: ContextVar[Optional[dict[str, Any]]] = ContextVar("genobase_logging_context", default=None)


@contextmanager
def logging_context_scope(**initial: Any) -> Iterator[dict[str, Any]]:
    """
    Open a fresh logging context for the enclosed block, restoring the previous one afterwards.
    """
    ctx: dict[str, Any] = {"application": __project__, "version": __version__, **initial}
    reset_token = _logging_context.set(ctx)
    try:
        yield ctx
    finally:
        _logging_context.reset(reset_token)


def save_to_logging_context(ctx: dict) -> dict:
    current = _logging_context.get()
    if current is None:
        logger.debug("Skipped saving to context. Context does not exist.")
        return {}

    for k, v in ctx.items():
        # Don't overwrite existing context mappings but create a list if a duplicated key is added.
        if k in current:
            existing_ctx = current[k]
            if isinstance(existing_ctx, list):
                current[k].append(v)
            else:
                current[k] = [existing_ctx, v]
        else:
            current[k] = v

    return current


def logging_context() -> dict:
    current = _logging_context.get()
    if current is None:
        return {}

    return dict(current)


def format_raised_exception_info_as_dict(err: BaseException) -> dict:
    tb = err.__traceback__ or sys.exc_info()[2]

    exc_ctx: dict = {
        "captured_exception_info": {
            "type": err.__class__.__name__,
            "string": str(err),
        }
    }

    try:
        exc_ctx["captured_exception_info"] = {
            **exc_ctx["captured_exception_info"],
            **[
                {"file": fs.filename, "line": fs.lineno, "func": fs.name}
                for fs in traceback.extract_tb(tb)
                # attempt to show only *our* code, not the many layers of library code
                if "/genobase/" in fs.filename
            ][-1],
        }

    # We did our best to construct useful traceback info
    except IndexError:
        pass

    return exc_ctx
