"""
Logging setup shared by the API and the consumer
"""
import logging

from laundry_service.config import settings


def configure_logging():
    """Configure root logging from LOG_LEVEL"""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
