"""Configuración centralizada de logging (loguru)."""

import sys

from loguru import logger


log_format = " | ".join(
    (
        "<lk>{time:HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{module}::{function}:{line}</>",
        "{message}",
    )
)


def configure_logging(level: str = "WARNING") -> None:
    """Reemplaza el handler por defecto por uno en stderr con ``level``."""
    logger.remove()
    logger.add(sys.stderr, format=log_format, level=level.upper())
