"""
SID runner — top-level orchestration: source files → rewritten files + report.

This module ties discovery, the core driver, policy verdicts, and IO
together into a single ``run_sid`` function that can be called from the
API endpoint, from a CLI, or programmatically.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from sid_rewriter.config import settings
from sid_rewriter.core.collisions import Collision, CollisionRegistry
from sid_rewriter.core.driver import preprocess
from sid_rewriter.core.errors import SidError
from sid_rewriter.core.hashing import HASH_FUNCTIONS, format_hash
from sid_rewriter.core.rewriter import Invocation
from sid_rewriter.io.discovery import SourceFile, discover_sources
from sid_rewriter.io.schema import (
    CollisionModel,
    ErrorModel,
    FileReport,
    InvocationModel,
    RunCounts,
    SidRunReport,
)
from sid_rewriter.io.writer import write_report
from sid_rewriter.policy.profile import SidProfile
from sid_rewriter.policy.verdict import FileStatus, judge_error, judge_result

logger = logging.getLogger(__name__)


# ── Conversion helpers ───────────────────────────────────────────────────────

def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="backslashreplace")


def _invocation_model(inv: Invocation) -> InvocationModel:
    return InvocationModel(
        line=inv.line,
        column=inv.column,
        offset=inv.offset,
        literal=inv.text,
        hash=inv.hash_hex,
    )


def _collision_model(c: Collision) -> CollisionModel:
    return CollisionModel(
        hash=format_hash(c.hash_value),
        first_literal=_decode(c.first_literal),
        first_location=c.first_location,
        literal=_decode(c.literal),
        location=c.location,
    )


def _destination_for(src: SourceFile, dest_dir: Optional[Path]) -> Path:
    if dest_dir is None:
        return src.path
    return dest_dir / src.relative


def _count(counts: RunCounts, status: FileStatus) -> None:
    counts.total += 1
    if status == FileStatus.MODIFIED:
        counts.modified += 1
    elif status == FileStatus.UNMODIFIED:
        counts.unmodified += 1
    elif status == FileStatus.SKIPPED:
        counts.skipped += 1
    else:
        counts.failed += 1


# ── Public API ───────────────────────────────────────────────────────────────

def run_sid(
    inputs: Sequence[Path],
    profile: SidProfile | None = None,
    dest_dir: Path | None = None,
    dry_run: bool = False,
    detect_collisions: bool = False,
    registry: CollisionRegistry | None = None,
    report_dir: Path | None = None,
) -> SidRunReport:
    """
    Preprocess every source file reachable from *inputs*.

    Parameters
    ----------
    inputs : Sequence[Path]
        Files and/or directories.  Directories are walked recursively
        and filtered by the profile's extensions.
    profile : SidProfile, optional
        Marker syntax and hash.  Defaults to ``SidProfile.v0()``.
    dest_dir : Path, optional
        Write rewritten files under this directory, mirroring their path
        relative to the input they were found in.  Default: in place.
    dry_run : bool
        Rewrite in memory only; never write source files.
    detect_collisions : bool
        Share one ``CollisionRegistry`` across all files and report
        literals that hash to the same value.
    registry : CollisionRegistry, optional
        Caller-owned registry to fill instead of a fresh one; implies
        collision detection.  Afterwards ``registry.table()`` maps every
        rewritten hash to its string.
    report_dir : Path, optional
        Directory to write ``sid_report.json``.  If None, no report is
        written to disk.

    Failures are per file: a bad file is recorded and the run continues.
    """
    if profile is None:
        profile = SidProfile.v0()

    if registry is None and detect_collisions:
        registry = CollisionRegistry()
    report = SidRunReport(
        profile_id=profile.profile_id,
        hash_name=profile.hash_name,
        marker=_decode(profile.marker),
        dry_run=dry_run,
    )
    counts = RunCounts()

    sources = discover_sources([Path(p) for p in inputs], profile.extensions)

    for src in sources:
        destination = _destination_for(src, dest_dir)
        logger.debug("Preprocessing %s", src.path)

        try:
            result = preprocess(
                src.path,
                destination,
                profile=profile,
                registry=registry,
                dry_run=dry_run,
            )
        except SidError as e:
            status, reasons = judge_error(e)
            if status == FileStatus.SKIPPED:
                logger.warning("Skipping %s", e)
            else:
                logger.error("Failed: %s", e)
            report.files.append(FileReport(
                path=str(src.path),
                status=status.value,
                reasons=reasons,
                error=ErrorModel(
                    kind=e.kind,
                    message=e.message,
                    line=e.line,
                    snippet=e.snippet,
                ),
            ))
            _count(counts, status)
            continue

        status, reasons = judge_result(result)
        report.files.append(FileReport(
            path=str(src.path),
            destination=str(result.destination) if result.written else None,
            status=status.value,
            reasons=reasons,
            invocations=[_invocation_model(i) for i in result.invocations],
        ))
        counts.invocations += len(result.invocations)
        _count(counts, status)

    report.counts = counts
    if registry is not None:
        report.collisions = [_collision_model(c) for c in registry.collisions]

    if report_dir:
        path = write_report(report, report_dir)
        logger.info("Wrote SID report to %s", path)

    return report


# ── CLI ──────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sid-rewrite",
        description="sid_rewriter — replace SID(\"...\") invocations with hashed constants",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Source files or directories to preprocess",
    )
    parser.add_argument(
        "-d", "--dest-dir",
        type=Path,
        default=None,
        help="Write rewritten files here instead of in place",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Dry run: report what would change, write nothing",
    )
    parser.add_argument(
        "--hash",
        choices=sorted(HASH_FUNCTIONS),
        default=settings.SID_HASH,
        help="Hash function (default: %(default)s)",
    )
    parser.add_argument(
        "--marker",
        default=settings.SID_MARKER,
        help="Marker macro name (default: %(default)s)",
    )
    parser.add_argument(
        "--detect-collisions",
        action="store_true",
        help="Report different strings that hash to the same value",
    )
    parser.add_argument(
        "-o", "--report-dir",
        type=Path,
        default=None,
        help="Directory to write sid_report.json",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for sid_rewriter."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.SID_LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        profile = SidProfile.from_settings(settings).with_overrides(
            profile_id=f"sid-{args.marker.lower()}-{args.hash}",
            marker=args.marker.encode("ascii"),
            hash_name=args.hash,
        )
    except (ValueError, KeyError) as e:
        logger.error("Invalid profile: %s", e)
        return 2

    report = run_sid(
        inputs=[Path(p) for p in args.inputs],
        profile=profile,
        dest_dir=args.dest_dir,
        dry_run=args.check,
        detect_collisions=args.detect_collisions,
        report_dir=args.report_dir,
    )

    # Print summary
    c = report.counts
    print(f"Files: {c.total} "
          f"(modified={c.modified}, unmodified={c.unmodified}, "
          f"failed={c.failed}, skipped={c.skipped})")
    print(f"Invocations: {c.invocations}")
    if report.collisions:
        print(f"Collisions: {len(report.collisions)}")
    if args.report_dir:
        print(f"Report written to: {args.report_dir}")

    return 1 if c.failed or c.skipped else 0


if __name__ == "__main__":
    sys.exit(main())
