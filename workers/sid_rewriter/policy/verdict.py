"""
Verdict logic for sid_rewriter v0.

Maps the outcome of ``preprocess`` on one file to a status plus reason
codes for the run report.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Tuple

from sid_rewriter.core.driver import PreprocessResult
from sid_rewriter.core.errors import SidError, SourceUnreadable


# ── Enums ────────────────────────────────────────────────────────────────────

class FileStatus(str, Enum):
    MODIFIED = "MODIFIED"
    UNMODIFIED = "UNMODIFIED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


class FileReason(str, Enum):
    NO_INVOCATIONS = "NO_INVOCATIONS"
    DRY_RUN = "DRY_RUN"
    HASH_COLLISION = "HASH_COLLISION"


# ── Judges ───────────────────────────────────────────────────────────────────

def judge_result(result: PreprocessResult) -> Tuple[FileStatus, List[str]]:
    """Status for a file that was processed without error."""
    reasons: List[str] = []

    if not result.modified:
        reasons.append(FileReason.NO_INVOCATIONS.value)
        return FileStatus.UNMODIFIED, reasons

    if not result.written:
        reasons.append(FileReason.DRY_RUN.value)
    if result.collisions:
        reasons.append(FileReason.HASH_COLLISION.value)
    return FileStatus.MODIFIED, reasons


def judge_error(exc: SidError) -> Tuple[FileStatus, List[str]]:
    """
    Status for a file that raised.

    An unreadable source is skipped; anything else is a failure of
    that file only.
    """
    if isinstance(exc, SourceUnreadable):
        return FileStatus.SKIPPED, [exc.kind]
    return FileStatus.FAILED, [exc.kind]
