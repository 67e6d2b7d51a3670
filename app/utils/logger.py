"""Application logger configuration."""
import logging

from app.config import settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
LOG_LEVEL = logging.DEBUG if settings.app_env == "development" else logging.INFO

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
# httpx logs every request line at INFO; backend calls are logged by the client wrapper.
logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
