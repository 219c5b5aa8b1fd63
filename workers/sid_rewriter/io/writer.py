"""
Writer — persist rewritten sources and the JSON run report.

Filesystem layout for reports:
    <report_dir>/sid_report.json
"""
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from sid_rewriter.core.errors import DestinationUnwritable
from sid_rewriter.io.schema import SidRunReport

REPORT_FILENAME = "sid_report.json"


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_rewritten(destination: Path, data: bytes) -> Path:
    """
    Replace *destination* with *data* in one step.

    The bytes go to a temporary file next to the destination which is
    then renamed over it, so a failure never leaves a truncated file.
    """
    destination = Path(destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent,
        )
    except OSError as exc:
        raise DestinationUnwritable(
            f"could not write output file ({exc.strerror or exc})",
            path=str(destination),
        ) from exc

    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        if destination.exists():
            mode = destination.stat().st_mode & 0o7777
        else:
            # mkstemp creates 0600; a new file gets what open() would give it.
            mode = 0o666 & ~_current_umask()
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, destination)
    except OSError as exc:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise DestinationUnwritable(
            f"could not write output file ({exc.strerror or exc})",
            path=str(destination),
        ) from exc

    return destination


def write_report(report: SidRunReport, report_dir: Path) -> Path:
    """
    Write ``sid_report.json`` into *report_dir*.

    Creates *report_dir* if it does not exist.
    Returns the report path.
    """
    report_dir.mkdir(parents=True, exist_ok=True)
    report_path = report_dir / REPORT_FILENAME
    report_path.write_text(
        json.dumps(
            report.model_dump(mode="json"),
            indent=2,
            sort_keys=True,
        )
        + "\n"
    )
    return report_path
