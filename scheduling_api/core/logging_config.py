import logging

from scheduling_api.core import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or config.LOG_LEVEL, format=LOG_FORMAT)

    if config.SQL_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
