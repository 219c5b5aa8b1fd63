"""Dump a hash -> string lookup table for every SID("...") under the given paths.

Runs the rewriter in dry-run mode, so no source file is touched.  The
table lets tools translate hashed IDs seen at run time back to names.

Usage:
    python scripts/dump_sid_table.py src/ include/ -o sid_table.json
"""
import argparse
import json
import sys
from pathlib import Path

from sid_rewriter.core.collisions import CollisionRegistry
from sid_rewriter.core.hashing import HASH_FUNCTIONS, format_hash
from sid_rewriter.policy.profile import SidProfile
from sid_rewriter.runner import run_sid


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("inputs", nargs="+", help="Source files or directories")
    parser.add_argument("--hash", choices=sorted(HASH_FUNCTIONS), default="djb2")
    parser.add_argument("-o", "--output", type=Path, default=None)
    args = parser.parse_args()

    profile = SidProfile.v0().with_overrides(hash_name=args.hash)
    registry = CollisionRegistry()
    report = run_sid([Path(p) for p in args.inputs], profile=profile, dry_run=True, registry=registry)

    table = {
        format_hash(value): literal.decode("utf-8", errors="backslashreplace")
        for value, literal in sorted(registry.table().items())
    }

    text = json.dumps(table, indent=2) + "\n"
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote {len(table)} strings to {args.output}")
    else:
        sys.stdout.write(text)

    for c in report.collisions:
        print(f"COLLISION {c.hash}: {c.first_literal!r} ({c.first_location}) "
              f"vs {c.literal!r} ({c.location})", file=sys.stderr)

    return 1 if report.collisions or report.counts.failed else 0


if __name__ == "__main__":
    sys.exit(main())
