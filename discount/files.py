"""File checks used when choosing where to write output."""

from __future__ import annotations

import os
import stat

__all__ = ["not_special"]


def not_special(path: str | os.PathLike[str]) -> bool:
    """True unless ``path`` exists and is not a regular file (fifo, device, socket, ...)."""
    try:
        info = os.stat(path)
    except OSError:
        return True
    return stat.S_ISREG(info.st_mode)