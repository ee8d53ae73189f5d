import logging
import logging.config
import os

from .config import load_stock_config
from .formatters import GenobaseJsonFormatter

__all__ = ["configure", "GenobaseJsonFormatter"]


def configure():
    """
    Configures logging for Genobase.

    A stock configuration is loaded from the ``genobase/logging/configurations/*.yaml``
    files, chosen based on the value of ``LOG_CONFIG``.

    Python library warnings are captured and logged at the ``WARNING`` level.
    """
    config_name = os.environ.get("LOG_CONFIG")
    stock_config = load_stock_config(config_name if config_name else "default")
    logging.config.dictConfig(stock_config)

    # Log library API warnings.
    logging.captureWarnings(True)
