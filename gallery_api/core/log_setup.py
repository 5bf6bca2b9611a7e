# gallery_api/core/log_setup.py
# Console (+ optional rotating file) logging for the "gallery" logger tree.
from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOGGER = logging.getLogger("gallery")

_CONSOLE_FMT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_FILE_FMT = "%(asctime)s\t%(levelname)s\t%(name)s\t%(threadName)s\t%(message)s"


def setup_logging(level: str = "INFO", logs_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure the 'gallery' logger:
      - console handler at `level`, human format
      - if logs_dir is given, a rotating file (gallery.log, 5 x 2 MiB) at the same level
    Safe to call more than once (handlers are replaced, not stacked).
    """
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logger = LOGGER
    logger.setLevel(numeric)
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    ch = logging.StreamHandler()
    ch.setLevel(numeric)
    ch.setFormatter(logging.Formatter(_CONSOLE_FMT, datefmt="%H:%M:%S"))
    logger.addHandler(ch)

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(
            logs_dir / "gallery.log", maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        fh.setLevel(numeric)
        fh.setFormatter(logging.Formatter(_FILE_FMT))
        logger.addHandler(fh)

    return logger
