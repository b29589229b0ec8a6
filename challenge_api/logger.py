import logging
from .config import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

def get_logger() -> logging.Logger:
    """Return the service logger"""
    return logging.getLogger("challenge_api")
