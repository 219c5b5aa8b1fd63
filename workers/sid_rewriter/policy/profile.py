"""
Profile descriptor for sid_rewriter.

Frozen dataclass holding the marker syntax, hash selection and the
file extensions considered during directory discovery.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Tuple

from sid_rewriter.core.hashing import DEFAULT_HASH_NAME, HashFunction, get_hash_function
from sid_rewriter.core.scanner import ALNUM

if TYPE_CHECKING:
    from sid_rewriter.config import SidSettings

DEFAULT_EXTENSIONS: Tuple[str, ...] = (
    ".c", ".cc", ".cpp", ".cxx", ".h", ".hh", ".hpp", ".hxx", ".inl",
)


@dataclass(frozen=True)
class SidProfile:
    """sid_rewriter v0 profile."""

    profile_id: str
    marker: bytes = b"SID"
    open_delim: bytes = b"("
    close_delim: bytes = b")"
    hash_name: str = DEFAULT_HASH_NAME
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    snippet_width: int = 32

    def __post_init__(self) -> None:
        if not self.marker or self.marker[0] not in ALNUM:
            raise ValueError(
                f"marker must start with an ASCII letter or digit: {self.marker!r}"
            )
        if not self.open_delim or not self.close_delim:
            raise ValueError("delimiters must be non-empty")
        # Fail early on unknown names.
        get_hash_function(self.hash_name)

    @property
    def token(self) -> bytes:
        """What the scanner matches: marker immediately followed by open delimiter."""
        return self.marker + self.open_delim

    @property
    def hash_fn(self) -> HashFunction:
        return get_hash_function(self.hash_name)

    def with_overrides(self, **changes) -> SidProfile:
        return replace(self, **changes)

    @classmethod
    def v0(cls) -> SidProfile:
        """The default ``SID( "..." )`` profile."""
        return cls(profile_id="sid-c-djb2")

    @classmethod
    def from_settings(cls, settings: SidSettings) -> SidProfile:
        """Build a profile from environment-driven settings."""
        return cls(
            profile_id=f"sid-{settings.SID_MARKER.lower()}-{settings.SID_HASH}",
            marker=settings.SID_MARKER.encode("ascii"),
            hash_name=settings.SID_HASH,
            extensions=tuple(settings.SID_EXTENSIONS),
        )
