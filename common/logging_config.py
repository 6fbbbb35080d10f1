"""
Logging Configuration.

All modules obtain their logger through `get_logger` so that output from
the solvers shares one format. Solvers log iteration counts at DEBUG and
non-convergence at WARNING before raising.
"""

import logging
import sys


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger configured for the geodesy package.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int
        Logging level.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def set_level(level: int, prefix: str = "") -> None:
    """Change the level of every logger created under `prefix`.

    Parameters
    ----------
    level : int
        New logging level, e.g. ``logging.DEBUG`` to see solver iteration
        counts.
    prefix : str
        Logger name prefix such as ``"geospatial"``. The empty string
        matches every logger created through `get_logger`.
    """
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and name.startswith(prefix):
            if logger.handlers:
                logger.setLevel(level)
