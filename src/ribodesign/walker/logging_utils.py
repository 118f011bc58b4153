"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/logging_utils.py

Console logging for the walker package. Library modules only call
logging.getLogger(__name__); the CLI decides where records go.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "ribodesign.walker"
_FILE_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def level_for_verbosity(verbose: int) -> int:
    """0 → WARNING, 1 → INFO, ≥2 → DEBUG."""
    if verbose <= 0:
        return logging.WARNING
    return logging.INFO if verbose == 1 else logging.DEBUG


def init_logger(level: str | int = "INFO", logfile: str | Path | None = None) -> logging.Logger:
    """
    (Re)configure the package logger: rich console output on stderr, plus an
    optional plain-text logfile. Idempotent; earlier handlers are replaced.
    """
    lvl = level if isinstance(level, int) else logging.getLevelName(str(level).upper())
    if not isinstance(lvl, int):
        raise ValueError(f"Unknown log level {level!r}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(lvl)
    logger.propagate = False

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    console_handler.setLevel(lvl)
    logger.addHandler(console_handler)

    if logfile:
        Path(logfile).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(logfile, encoding="utf-8")
        fh.setLevel(lvl)
        fh.setFormatter(logging.Formatter(_FILE_FMT))
        logger.addHandler(fh)
    return logger
