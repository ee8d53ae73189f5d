import logging as module_logging

logger = module_logging.getLogger(__name__)

__project__ = "genobase"
__version__ = "2024.6.0"
