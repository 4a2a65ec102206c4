# src/utils/logging_setup.py
from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Optional, Union

_ROOT_NAME = "showcase"


def setup_logging(level: Union[int, str] = logging.INFO, *, log_to_file: bool = False) -> None:
    """
    Configure root logging with a readable format and optional file sink.
    Silences noisy third-party loggers by default.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    datefmt = "%H:%M:%S"
    logging.basicConfig(level=level, format=fmt, datefmt=datefmt)

    # Tone down chatty libraries
    for noisy in ("PIL", "matplotlib", "asyncio", "OpenGL"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if log_to_file:
        os.makedirs("logs", exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d-%H%M%S")
        fh = logging.FileHandler(f"logs/showcase-{ts}.log", encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(fmt, datefmt))
        logging.getLogger().addHandler(fh)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Namespaced logger: get_logger("camera_rig") -> 'showcase.camera_rig'."""
    if not name:
        return logging.getLogger(_ROOT_NAME)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
