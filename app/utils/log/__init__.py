import logging

from app.utils.config import settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)
    # pymongo's heartbeat chatter drowns out request logs at DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)
