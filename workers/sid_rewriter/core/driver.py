"""
Driver — whole-file preprocessing.

``rewrite_buffer`` is the pure scan/rewrite loop over bytes already in
memory.  ``preprocess`` wraps it with one bulk read and, only when at
least one invocation was rewritten, one atomic bulk write.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from sid_rewriter.core.collisions import Collision, CollisionRegistry
from sid_rewriter.core.hashing import HashFunction
from sid_rewriter.core.rewriter import Invocation, rewrite_invocation
from sid_rewriter.core.scanner import Cursor, scan_to_invocation
from sid_rewriter.io.reader import read_source
from sid_rewriter.io.writer import write_rewritten
from sid_rewriter.policy.profile import SidProfile

logger = logging.getLogger(__name__)


@dataclass
class RewriteResult:
    """Output of one in-memory pass."""
    output: bytes
    invocations: List[Invocation] = field(default_factory=list)
    collisions: List[Collision] = field(default_factory=list)

    @property
    def modified(self) -> bool:
        return bool(self.invocations)


@dataclass
class PreprocessResult:
    """Outcome of ``preprocess`` for one file."""
    source: Path
    destination: Path
    modified: bool
    written: bool
    invocations: List[Invocation] = field(default_factory=list)
    collisions: List[Collision] = field(default_factory=list)


def rewrite_buffer(
    data: bytes,
    profile: Optional[SidProfile] = None,
    hash_fn: Optional[HashFunction] = None,
    path: Optional[str] = None,
    registry: Optional[CollisionRegistry] = None,
) -> RewriteResult:
    """
    Rewrite every invocation in *data*.

    Parameters
    ----------
    data : bytes
        Full file content.
    profile : SidProfile, optional
        Marker syntax.  Defaults to ``SidProfile.v0()``.
    hash_fn : HashFunction, optional
        Overrides the profile's named hash.
    path : str, optional
        Used in diagnostics and collision locations only.
    registry : CollisionRegistry, optional
        When given, every rewritten literal is registered in it.

    Raises
    ------
    SidError
        On the first malformed invocation.  No partial result is
        returned.
    """
    if profile is None:
        profile = SidProfile.v0()
    if hash_fn is None:
        hash_fn = profile.hash_fn

    token = profile.token
    cursor = Cursor(data)
    result = RewriteResult(output=b"")

    while scan_to_invocation(cursor, token):
        inv = rewrite_invocation(
            cursor,
            hash_fn,
            close_delim=profile.close_delim,
            marker_offset=cursor.pos - len(token),
            path=path,
            snippet_width=profile.snippet_width,
        )
        result.invocations.append(inv)

    # Only a fully rewritten file contributes to the registry.
    if registry is not None:
        for inv in result.invocations:
            collision = registry.record(
                inv.hash_value, inv.literal, f"{path or '<buffer>'}:{inv.line}",
            )
            if collision is not None:
                result.collisions.append(collision)

    result.output = cursor.out.getvalue()
    return result


def preprocess(
    source_path: Path,
    destination_path: Optional[Path] = None,
    profile: Optional[SidProfile] = None,
    hash_fn: Optional[HashFunction] = None,
    registry: Optional[CollisionRegistry] = None,
    dry_run: bool = False,
) -> PreprocessResult:
    """
    Preprocess one file.

    *destination_path* defaults to *source_path* (in-place rewrite).  The
    destination is only touched when at least one invocation was
    rewritten and *dry_run* is False; otherwise it is left exactly as it
    was.

    Raises
    ------
    SourceUnreadable
        The source could not be read.
    InvalidInvocation, UnterminatedLiteral, MissingClosingDelimiter
        Malformed invocation; nothing is written.
    DestinationUnwritable
        The rewritten output could not be written.
    """
    source_path = Path(source_path)
    destination = Path(destination_path) if destination_path is not None else source_path

    data = read_source(source_path)
    rr = rewrite_buffer(
        data,
        profile=profile,
        hash_fn=hash_fn,
        path=str(source_path),
        registry=registry,
    )

    written = False
    if rr.modified and not dry_run:
        write_rewritten(destination, rr.output)
        written = True
        logger.info(
            "Rewrote %d invocation(s) in %s -> %s",
            len(rr.invocations), source_path, destination,
        )
    elif rr.modified:
        logger.info("Would rewrite %d invocation(s) in %s", len(rr.invocations), source_path)
    else:
        logger.debug("No invocations in %s", source_path)

    return PreprocessResult(
        source=source_path,
        destination=destination,
        modified=rr.modified,
        written=written,
        invocations=rr.invocations,
        collisions=rr.collisions,
    )
