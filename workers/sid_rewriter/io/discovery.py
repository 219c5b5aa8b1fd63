"""
Discovery — expand CLI/API inputs into candidate source files.

Directories are walked recursively; hidden directories are skipped.
Each result keeps the input root it was found under so that rewritten
files can be mirrored into a destination directory.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """A candidate file and the input root it came from."""
    path: Path
    root: Path

    @property
    def relative(self) -> Path:
        return self.path.relative_to(self.root)


def _matches(path: Path, extensions: Sequence[str]) -> bool:
    return path.suffix.lower() in {e.lower() for e in extensions}


def discover_sources(
    inputs: Iterable[Path],
    extensions: Sequence[str],
) -> List[SourceFile]:
    """
    Expand *inputs* into a sorted, de-duplicated list of source files.

    An explicit file is always kept, whatever its extension; files found
    inside a directory are kept only if their suffix is in *extensions*.
    A missing input is kept as-is so the caller reports it as unreadable.
    """
    found: List[SourceFile] = []
    seen = set()

    for raw in inputs:
        root = Path(raw)
        if root.is_dir():
            for dirpath, dirnames, filenames in os.walk(root):
                dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
                for name in sorted(filenames):
                    p = Path(dirpath) / name
                    if not _matches(p, extensions):
                        continue
                    if p in seen:
                        continue
                    seen.add(p)
                    found.append(SourceFile(path=p, root=root))
        else:
            if root in seen:
                continue
            seen.add(root)
            found.append(SourceFile(path=root, root=root.parent))

    logger.debug("Discovered %d source files", len(found))
    return found
