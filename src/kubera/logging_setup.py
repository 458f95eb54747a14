"""
Configuración centralizada de logging para ``kubera``.

- ``configure_logging(...)``: agrega un único ``RichHandler`` al logger raíz del
  paquete. Lo llama el CLI una sola vez al arrancar.
- ``get_logger(name)``: devuelve un logger; mientras no haya configuración,
  el logger raíz lleva un ``NullHandler`` para no ensuciar a quien nos use
  como librería.

Los módulos de la librería nunca agregan handlers propios.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

_PKG_LOGGER_NAME = "kubera"
_CONFIGURED = False


def _level_from_name(name: str) -> Optional[int]:
    name = name.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = getattr(logging, name, None)
    return numeric if isinstance(numeric, int) else None


def _parse_level(level: Union[int, str, None]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        numeric = _level_from_name(level)
        if numeric is not None:
            return numeric
    env_val = os.getenv("KUBERA_LOG_LEVEL")
    if env_val:
        numeric = _level_from_name(env_val)
        if numeric is not None:
            return numeric
    return logging.INFO


def configure_logging(level: Union[int, str, None] = None, console: Optional[Console] = None) -> None:
    """
    Configura el logger raíz del paquete una sola vez.
    Nivel: argumento -> KUBERA_LOG_LEVEL -> INFO.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    numeric = _parse_level(level)
    handler = RichHandler(console=console or Console(stderr=True), show_path=False)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.setLevel(numeric)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
