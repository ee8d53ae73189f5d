from genobase.lib.logging.context import (
    format_raised_exception_info_as_dict,
    logging_context,
    logging_context_scope,
    save_to_logging_context,
)

__all__ = [
    "format_raised_exception_info_as_dict",
    "logging_context",
    "logging_context_scope",
    "save_to_logging_context",
]
