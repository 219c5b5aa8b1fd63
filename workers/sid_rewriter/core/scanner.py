"""
Scanner — verbatim copier that stops at marker invocations.

Works on raw bytes.  The only tokenization is "is this byte ASCII
whitespace" and "is this byte ASCII alphanumeric"; the marker is only
tried at the first byte of an alphanumeric run so that it is never found
inside a longer identifier.
"""
from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

# ── Byte classes ─────────────────────────────────────────────────────────────

# Same set as C isspace() in the "C" locale.
WHITESPACE = frozenset(b" \t\n\r\x0b\x0c")
ALNUM = frozenset((string.ascii_letters + string.digits).encode("ascii"))


# ── Buffers ──────────────────────────────────────────────────────────────────

class OutputBuffer:
    """Append-only byte buffer.  Grows on demand."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def append(self, chunk: bytes) -> None:
        self._buf += chunk

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)


@dataclass
class Cursor:
    """
    Read position into an immutable input plus the output it feeds.

    ``pos`` only moves forward and ``out`` only grows.
    """
    data: bytes
    pos: int = 0
    out: OutputBuffer = field(default_factory=OutputBuffer)
    _line_offset: int = field(default=0, init=False, repr=False)
    _line: int = field(default=1, init=False, repr=False)
    _line_start: int = field(default=0, init=False, repr=False)

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def peek(self) -> Optional[int]:
        """Current byte, or None at end of input."""
        if self.pos >= len(self.data):
            return None
        return self.data[self.pos]

    def copy_to(self, end: int) -> None:
        """Copy ``data[pos:end]`` to the output and advance."""
        if end > self.pos:
            self.out.append(self.data[self.pos:end])
            self.pos = end

    def skip_to(self, end: int) -> None:
        """Advance to *end* without copying."""
        if end > self.pos:
            self.pos = end

    def line_col(self, offset: int) -> Tuple[int, int]:
        """
        1-based (line, column) of *offset* in the input.

        Newlines are counted from the previous query onwards, so calls
        with non-decreasing offsets cost one pass over the input.
        """
        if offset < self._line_offset:
            self._line_offset, self._line, self._line_start = 0, 1, 0
        newlines = self.data.count(b"\n", self._line_offset, offset)
        if newlines:
            self._line += newlines
            self._line_start = self.data.rfind(b"\n", self._line_offset, offset) + 1
        self._line_offset = offset
        return self._line, offset - self._line_start + 1


# ── Scanning ─────────────────────────────────────────────────────────────────

class ScanStep(str, Enum):
    COPIED = "COPIED"
    FOUND = "FOUND"
    END = "END"


def run_end(data: bytes, pos: int, charset: frozenset) -> int:
    """Index of the first byte at or after *pos* not in *charset*."""
    end = pos
    size = len(data)
    while end < size and data[end] in charset:
        end += 1
    return end


def copy_whitespace(cursor: Cursor) -> None:
    cursor.copy_to(run_end(cursor.data, cursor.pos, WHITESPACE))


def skip_whitespace(cursor: Cursor) -> None:
    cursor.skip_to(run_end(cursor.data, cursor.pos, WHITESPACE))


def scan_step(cursor: Cursor, token: bytes) -> ScanStep:
    """
    Advance by one unit: a whitespace run followed by either a single
    non-alphanumeric byte or a whole alphanumeric run.

    *token* is the marker immediately followed by the opening delimiter,
    e.g. ``b"SID("``.  When the alphanumeric run starts with *token*, the
    cursor is left just after it and ``FOUND`` is returned; nothing of
    the token is copied.
    """
    if cursor.at_end():
        return ScanStep.END

    copy_whitespace(cursor)
    if cursor.at_end():
        return ScanStep.END

    data = cursor.data
    if data[cursor.pos] not in ALNUM:
        cursor.copy_to(cursor.pos + 1)
        return ScanStep.COPIED

    if data.startswith(token, cursor.pos):
        cursor.skip_to(cursor.pos + len(token))
        return ScanStep.FOUND

    # Whole run, so a marker-like suffix inside it is never retried.
    cursor.copy_to(run_end(data, cursor.pos, ALNUM))
    return ScanStep.COPIED


def scan_to_invocation(cursor: Cursor, token: bytes) -> bool:
    """
    Copy input to output until the next invocation or end of input.

    Returns True when an invocation was found (cursor sits right after
    *token*), False at end of input.
    """
    while True:
        step = scan_step(cursor, token)
        if step is ScanStep.FOUND:
            return True
        if step is ScanStep.END:
            return False
