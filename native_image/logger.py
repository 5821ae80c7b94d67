"""Единая настройка логирования: вывод в консоль, уровень берётся из настроек."""

import logging
from typing import Optional

from native_image.config import get_settings

_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """Настраивает корневой логгер (при старте или повторно)."""
    global _configured

    log_level = (level or get_settings().log_level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Сбрасываем существующие обработчики
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(console_handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Именованный логгер; при первом вызове выполняет `setup_logging`."""
    if not _configured:
        setup_logging()
    return logging.getLogger(name)
