import functools
import logging
import sys

from core.config import settings


class AppLogger:
    def __init__(self, name: str, log_level: int = logging.INFO):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level=log_level)

        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        self.logger.addHandler(handler)


@functools.lru_cache
def init_logger(name: str = "portfolio"):
    """
        one logger per name, handler attached on the first call only
    :param name:
    :return:
    """
    log_level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    logger = AppLogger(name=name, log_level=log_level)
    return logger.logger
