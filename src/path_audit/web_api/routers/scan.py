"""
Scan Router
===========
Endpoints for running path length scans.
"""
from pathlib import Path

from fastapi import APIRouter, HTTPException

from path_audit import api as core_api
from path_audit.core.errors import ScanSetupError
from path_audit.web_api.config import settings
from path_audit.web_api.schemas.scan import (
    ScanRequest,
    ScanResponse,
    ScanSummary,
)

router = APIRouter()


@router.post("/", response_model=ScanResponse)
def run_scan(request: ScanRequest):
    """
    Scan a directory tree for over-length paths.

    - **root_path**: Local directory to scan
    - **max_length**: Longest allowed path (default from environment, else 260)
    - **use_parallel**: Filter entries on a worker pool

    Blocking; FastAPI runs this handler in its threadpool.
    """
    target = Path(request.root_path)
    if not target.exists():
        raise HTTPException(status_code=404, detail=f"Path not found: {request.root_path}")

    if request.throttle_limit is not None and request.throttle_limit > settings.MAX_THROTTLE_LIMIT:
        raise HTTPException(
            status_code=422,
            detail=f"throttle_limit may not exceed {settings.MAX_THROTTLE_LIMIT}",
        )

    try:
        _, result = core_api.scan_path(
            target,
            max_length=request.max_length,
            use_parallel=request.use_parallel,
            throttle_limit=request.throttle_limit,
            batch_size=request.batch_size,
            executor=request.executor,
        )
    except ScanSetupError as e:
        raise HTTPException(status_code=422, detail=str(e))

    summary = result["summary"]
    return ScanResponse(
        status="complete",
        summary=ScanSummary(
            entries_scanned=summary["entries_scanned"],
            violations_total=summary["violations_total"],
            longest=summary["longest"],
            skipped_locations=len(result["diagnostics"]),
        ),
        result=result,
    )
