"""
SID Router
Compile-time string hashing for C/C++ sources.

Runs the sid_rewriter package over a file or directory below the
configured sources root, and exposes the hash function for run-time
lookups.
"""
import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from app.config import settings
from sid_rewriter import PACKAGE_NAME, REWRITER_VERSION
from sid_rewriter.core.hashing import HASH_FUNCTIONS, format_hash, get_hash_function
from sid_rewriter.io.schema import SidRunReport
from sid_rewriter.policy.profile import SidProfile
from sid_rewriter.runner import run_sid

logger = logging.getLogger(__name__)


# =============================================================================
# Request/Response Models
# =============================================================================

class SidRunRequest(BaseModel):
    """Request to preprocess sources."""
    path: str = Field(
        ...,
        description="File or directory, relative to the sources root",
    )
    dry_run: bool = Field(
        False,
        description="Report what would change without writing files",
    )
    hash_name: str = Field(
        "djb2",
        description="Registered hash function name",
    )
    marker: str = Field(
        "SID",
        description="Marker macro name",
    )
    detect_collisions: bool = Field(
        False,
        description="Report different strings sharing a hash",
    )


class SidHashRequest(BaseModel):
    """Request to hash a single string at run time."""
    text: str
    hash_name: str = "djb2"


class SidHashResponse(BaseModel):
    package_name: str = PACKAGE_NAME
    rewriter_version: str = REWRITER_VERSION
    hash_name: str
    value: int
    hex: str
    token: str


# =============================================================================
# Router
# =============================================================================

router = APIRouter()


def _resolve_under_root(rel: str) -> Path:
    root = Path(settings.SOURCES_ROOT).resolve()
    target = (root / rel).resolve()
    if target != root and root not in target.parents:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Path escapes sources root: {rel}",
        )
    if not target.exists():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Path not found: {rel}",
        )
    return target


@router.post(
    "/run",
    response_model=SidRunReport,
    status_code=status.HTTP_200_OK,
    summary="Rewrite SID invocations under the sources root",
)
async def run_sid_endpoint(request: SidRunRequest):
    """
    Preprocess the requested file or directory in place.

    Per-file failures are reported in the response, not raised.
    """
    if request.hash_name not in HASH_FUNCTIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown hash function: {request.hash_name}",
        )

    target = _resolve_under_root(request.path)

    try:
        profile = SidProfile.v0().with_overrides(
            profile_id=f"sid-{request.marker.lower()}-{request.hash_name}",
            marker=request.marker.encode("ascii"),
            hash_name=request.hash_name,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    report = run_sid(
        [target],
        profile=profile,
        dry_run=request.dry_run,
        detect_collisions=request.detect_collisions,
    )
    logger.info(
        "sid run on %s: %d files, %d modified, %d failed",
        target, report.counts.total, report.counts.modified, report.counts.failed,
    )
    return report


@router.post(
    "/hash",
    response_model=SidHashResponse,
    summary="Hash one string the way the preprocessor would",
)
async def hash_endpoint(request: SidHashRequest):
    """
    Hash *text* (UTF-8 encoded) with the named function.

    The input is hashed as-is; it is expected to be the raw literal
    contents, escapes included.
    """
    try:
        fn = get_hash_function(request.hash_name)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown hash function: {request.hash_name}",
        )

    value = fn(request.text.encode("utf-8"))
    hex_value = format_hash(value)
    return SidHashResponse(
        hash_name=request.hash_name,
        value=value,
        hex=hex_value,
        token=f'{hex_value} /* "{request.text}" */',
    )
