"""
Schema — Pydantic models for the sid_rewriter JSON run report.

One output file:
  sid_report.json — per-file status, rewritten invocations, collisions.

Runtime contract fields (present in every report):
  package_name, rewriter_version, profile_id, schema_version.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from sid_rewriter import PACKAGE_NAME, REWRITER_VERSION, SCHEMA_VERSION


# ── Per-invocation ───────────────────────────────────────────────────────────

class InvocationModel(BaseModel):
    """One rewritten invocation."""
    line: int
    column: int
    offset: int
    literal: str             # raw literal text, escapes verbatim
    hash: str                # 0xHHHHHHHH


# ── Per-file ─────────────────────────────────────────────────────────────────

class ErrorModel(BaseModel):
    """A file-scoped failure."""
    kind: str
    message: str
    line: Optional[int] = None
    snippet: Optional[str] = None


class FileReport(BaseModel):
    """Outcome for one source file."""
    path: str
    destination: Optional[str] = None
    status: str              # MODIFIED | UNMODIFIED | FAILED | SKIPPED
    reasons: List[str] = Field(default_factory=list)
    invocations: List[InvocationModel] = Field(default_factory=list)
    error: Optional[ErrorModel] = None


# ── Collisions ───────────────────────────────────────────────────────────────

class CollisionModel(BaseModel):
    hash: str
    first_literal: str
    first_location: str
    literal: str
    location: str


# ── Counts ───────────────────────────────────────────────────────────────────

class RunCounts(BaseModel):
    total: int = 0
    modified: int = 0
    unmodified: int = 0
    failed: int = 0
    skipped: int = 0
    invocations: int = 0


# ── Top-level output ─────────────────────────────────────────────────────────

class SidRunReport(BaseModel):
    """
    sid_report.json — one run over one or more files.
    """
    package_name: str = PACKAGE_NAME
    rewriter_version: str = REWRITER_VERSION
    schema_version: str = SCHEMA_VERSION
    profile_id: str
    hash_name: str
    marker: str
    dry_run: bool = False
    files: List[FileReport] = Field(default_factory=list)
    counts: RunCounts = RunCounts()
    collisions: List[CollisionModel] = Field(default_factory=list)
