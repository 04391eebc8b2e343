import logging
from typing import Optional

from rich.logging import RichHandler

from datatype.config import NormalizerSettings, load_settings

PACKAGE_LOGGER = "datatype"


def configure_logging(level: Optional[str] = None,
                      settings: Optional[NormalizerSettings] = None) -> logging.Logger:
    """Attach a coloured console handler to the package logger.

    Safe to call more than once; the root logger is left alone.
    """
    if level is None:
        level = (settings or load_settings()).log_level

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
