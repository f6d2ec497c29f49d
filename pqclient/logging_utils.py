"""pqclient.logging_utils

Logging utilities:
- File logging for operational debugging of primusquery calls
- Diagnostic detail (commands, raw outputs) goes to DEBUG, which is only
  enabled when the debug flag is on
"""

from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Sequence

def build_logger(log_dir: str, name: str = "pqclient", debug: bool = False) -> logging.Logger:
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Avoid duplicate handlers when the client is rebuilt
    if logger.handlers:
        return logger

    log_path = Path(log_dir) / f"{name}.log"
    handler = RotatingFileHandler(str(log_path), maxBytes=2_000_000, backupCount=5, encoding="utf-8")
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    logger.addHandler(console)
    return logger


def mask_argv(argv: Sequence[str]) -> list[str]:
    """Return argv with the import-mode password replaced by ***."""
    masked = list(argv)
    if "-i" in masked:
        # argv = [exe, host, port, user, password, loader, "-i", file]
        pw_index = masked.index("-i") - 2
        if pw_index > 0:
            masked[pw_index] = "***"
    return masked
