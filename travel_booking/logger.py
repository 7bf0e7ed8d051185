"""
Настройка логирования приложения.

Логи пишутся в stderr или в файл, чтобы не смешиваться с выводом меню.
"""

import json
import logging
import sys
from typing import Any, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Настраивает корневой логгер пакета."""
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("travel_booking")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    package_logger.propagate = False


class StandardLogger:
    """Логгер с дополнительным контекстом в виде именованных аргументов."""

    def __init__(self, name: str = "travel_booking"):
        self._logger = logging.getLogger(name)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def _log(self, level: int, message: str, context: dict) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if context:
            message = f"{message} {json.dumps(context, default=str, ensure_ascii=False)}"
        self._logger.log(level, message)


def get_logger(name: str) -> StandardLogger:
    return StandardLogger(name)
