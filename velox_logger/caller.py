"""Guess a logger name from the code that asked for one."""

import inspect
import os
from pathlib import Path
from typing import Optional

ANONYMOUS = "Anonymous"

_PACKAGE_DIR = str(Path(__file__).resolve().parent)


def _is_internal(filename: str) -> bool:
    try:
        path = str(Path(filename).resolve())
    except (OSError, ValueError):
        return False
    return path == _PACKAGE_DIR or path.startswith(_PACKAGE_DIR + os.sep)


def caller_filename(frame=None) -> Optional[str]:
    """Source file of the first frame outside this package, walking outward."""
    frame = frame or inspect.currentframe()
    try:
        while frame is not None:
            filename = frame.f_code.co_filename
            if filename and not _is_internal(filename):
                return filename
            frame = frame.f_back
        return None
    finally:
        del frame


def infer_logger_name(frame=None) -> str:
    """Base name of the calling module's file, e.g. ``"worker.py"``."""
    filename = caller_filename(frame)
    if not filename:
        return ANONYMOUS
    return os.path.basename(filename)
