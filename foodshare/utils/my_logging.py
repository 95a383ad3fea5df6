# foodshare/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from foodshare.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s %(business_id)s] %(message)s"


class RequestContextFilter(logging.Filter):
    """Fill the request fields for records logged outside a request"""

    def filter(self, record):
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        if not hasattr(record, "business_id"):
            record.business_id = "-"
        return True


def setup_logging(verbose=True):
    """Configure application logging"""
    settings = get_settings()

    if verbose:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    else:
        level = logging.WARNING

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler])

    # Statement echo from the in-memory store is never useful
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    if not verbose:
        for name in ("sqlalchemy", "uvicorn", "uvicorn.error", "uvicorn.access", "foodshare.core.middleware"):
            logger = logging.getLogger(name)
            logger.setLevel(logging.ERROR)
            logger.propagate = False
