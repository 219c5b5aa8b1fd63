"""
Rewriter — consume one marker invocation and emit its hashed replacement.

Called with the cursor just past ``<marker><open>``.  On success the
cursor is past the closing delimiter and the output has gained::

    0xHHHHHHHH /* "<raw literal>" */

Any malformation raises a ``SidError`` subclass; the output written so
far is then meaningless and the caller must discard it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sid_rewriter.core.errors import (
    InvalidInvocation,
    MissingClosingDelimiter,
    UnterminatedLiteral,
)
from sid_rewriter.core.hashing import HashFunction, format_hash, format_replacement
from sid_rewriter.core.scanner import Cursor, skip_whitespace

logger = logging.getLogger(__name__)

_QUOTE = ord('"')
_BACKSLASH = ord("\\")


@dataclass(frozen=True)
class Invocation:
    """One successfully rewritten invocation."""
    offset: int          # byte offset of the marker in the input
    line: int            # 1-based
    column: int          # 1-based
    literal: bytes       # raw span between the quotes, escapes included
    hash_value: int

    @property
    def hash_hex(self) -> str:
        return format_hash(self.hash_value)

    @property
    def text(self) -> str:
        return self.literal.decode("utf-8", errors="backslashreplace")


def make_snippet(data: bytes, start: int, width: int) -> str:
    """Printable excerpt of *data* from *start*, cut to *width* bytes."""
    chunk = data[start:start + width]
    return chunk.decode("utf-8", errors="backslashreplace")


def find_literal_end(data: bytes, start: int) -> Optional[int]:
    """
    Index of the unescaped closing quote for a literal starting at
    *start* (just after the opening quote), or None if input ends first.

    A backslash always swallows the following byte, whatever it is.
    """
    pos = start
    size = len(data)
    while pos < size:
        byte = data[pos]
        if byte == _BACKSLASH:
            pos += 2
            continue
        if byte == _QUOTE:
            return pos
        pos += 1
    return None


def rewrite_invocation(
    cursor: Cursor,
    hash_fn: HashFunction,
    close_delim: bytes = b")",
    marker_offset: Optional[int] = None,
    path: Optional[str] = None,
    snippet_width: int = 32,
) -> Invocation:
    """
    Rewrite the invocation whose marker token the scanner just consumed.

    Parameters
    ----------
    cursor : Cursor
        Positioned immediately after the marker and opening delimiter.
    hash_fn : HashFunction
        Applied to the raw literal span.
    close_delim : bytes
        Required after the literal (whitespace allowed before it).
    marker_offset : int, optional
        Offset of the marker, for the returned record and diagnostics.
        Defaults to the cursor position.
    path : str, optional
        Source path, only used in error messages.
    snippet_width : int
        Maximum bytes of input quoted in error messages.

    Raises
    ------
    InvalidInvocation, UnterminatedLiteral, MissingClosingDelimiter
    """
    data = cursor.data
    if marker_offset is None:
        marker_offset = cursor.pos
    line, column = cursor.line_col(marker_offset)

    # ── expect opening quote ─────────────────────────────────────────
    skip_whitespace(cursor)
    if cursor.peek() != _QUOTE:
        raise InvalidInvocation(
            "expected string literal after marker",
            path=path,
            offset=cursor.pos,
            line=line,
            snippet=make_snippet(data, marker_offset, snippet_width),
        )

    # ── literal span ─────────────────────────────────────────────────
    start = cursor.pos + 1
    end = find_literal_end(data, start)
    if end is None:
        raise UnterminatedLiteral(
            "string literal is never closed",
            path=path,
            offset=start,
            line=line,
            snippet=make_snippet(data, start, snippet_width),
        )

    literal = data[start:end]
    value = hash_fn(literal)
    cursor.out.append(format_replacement(value, literal))

    # ── expect closing delimiter ─────────────────────────────────────
    cursor.skip_to(end + 1)
    skip_whitespace(cursor)
    if not data.startswith(close_delim, cursor.pos):
        raise MissingClosingDelimiter(
            f"expected {close_delim.decode('ascii', errors='replace')!r} "
            "after string literal",
            path=path,
            offset=cursor.pos,
            line=line,
            snippet=make_snippet(data, start, min(end - start, snippet_width)),
        )
    cursor.skip_to(cursor.pos + len(close_delim))

    logger.debug("%s:%d rewrote %r -> %s", path, line, literal, format_hash(value))
    return Invocation(
        offset=marker_offset,
        line=line,
        column=column,
        literal=literal,
        hash_value=value,
    )
