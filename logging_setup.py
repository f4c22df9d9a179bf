#!/usr/bin/env python3
"""
logging_setup.py
================
Configures the root logger with a console handler and a rotating file
handler (``route_sim.log``, 1 MB, 2 backups).

Call :func:`setup_logging` once at startup before any other ``import``
triggers ``logging.getLogger()``.
"""

import logging
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_file: str = "route_sim.log",
    debug_file: str = "simulator_debug.log",
) -> None:
    """Apply a unified log format to both console and file output.

    Parameters
    ----------
    level : int
        Minimum severity level (e.g. ``logging.DEBUG``, ``logging.INFO``).
    log_file : str
        Rotating file receiving everything at *level* and above.
    debug_file : str
        Rotating file receiving per-tick DEBUG output of the
        ``simulator`` logger.
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(LOG_FORMAT)

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(fmt)

    fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=2)
    fh.setLevel(level)
    fh.setFormatter(fmt)

    root.handlers.clear()
    root.addHandler(ch)
    root.addHandler(fh)

    # ── Dedicated debug file for per-tick simulator output ────────────
    sim_logger = logging.getLogger("simulator")
    sim_logger.setLevel(logging.DEBUG)
    for handler in list(sim_logger.handlers):
        sim_logger.removeHandler(handler)
        handler.close()
    dfh = RotatingFileHandler(debug_file, maxBytes=5_000_000, backupCount=2)
    dfh.setLevel(logging.DEBUG)
    dfh.setFormatter(fmt)
    sim_logger.addHandler(dfh)
