"""
Errors — file-scoped failure taxonomy.

Core code raises these and never prints.  Callers that process many
files catch ``SidError`` per file and carry on with the rest.
"""
from __future__ import annotations

from typing import Optional


class SidError(Exception):
    """Base class for every failure tied to a single source file."""

    kind = "SID_ERROR"

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        offset: Optional[int] = None,
        line: Optional[int] = None,
        snippet: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.offset = offset
        self.line = line
        self.snippet = snippet

    def __str__(self) -> str:
        where = self.path or "<buffer>"
        if self.line is not None:
            where = f"{where}:{self.line}"
        text = f"{where}: {self.message}"
        if self.snippet is not None:
            text += f' (near "{self.snippet}")'
        return text


class SourceUnreadable(SidError):
    """The input file could not be opened or read."""

    kind = "SOURCE_UNREADABLE"


class DestinationUnwritable(SidError):
    """The rewritten output could not be written."""

    kind = "DESTINATION_UNWRITABLE"


class InvalidInvocation(SidError):
    """Marker not followed by optional whitespace and a string literal."""

    kind = "INVALID_INVOCATION"


class UnterminatedLiteral(SidError):
    """End of input reached inside a string literal."""

    kind = "UNTERMINATED_LITERAL"


class MissingClosingDelimiter(SidError):
    """The closing delimiter does not follow the string literal."""

    kind = "MISSING_CLOSING_DELIMITER"
