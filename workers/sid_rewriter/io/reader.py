"""
Reader — bulk read of one source file.
"""
from __future__ import annotations

from pathlib import Path

from sid_rewriter.core.errors import SourceUnreadable


def read_source(path: Path) -> bytes:
    """
    Read the whole file into memory.

    Raises
    ------
    SourceUnreadable
        If the path is missing, is a directory, or cannot be read.
    """
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise SourceUnreadable(
            f"could not open input file ({exc.strerror or exc})",
            path=str(path),
        ) from exc
