"""
Scan Schemas
============
Request and response models for scan endpoints.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ScanRequest(BaseModel):
    """Request to scan a directory tree"""

    root_path: str = Field(..., description="Local directory to scan")
    max_length: Optional[int] = Field(default=None, description="Longest allowed path")
    use_parallel: bool = Field(default=False, description="Filter in batches on a worker pool")
    throttle_limit: Optional[int] = Field(default=None, description="Maximum concurrent workers")
    batch_size: Optional[int] = Field(default=None, description="Entries per batch")
    executor: Optional[str] = Field(default=None, description="process or thread")

    class Config:
        json_schema_extra = {
            "example": {
                "root_path": "/srv/share",
                "max_length": 260,
                "use_parallel": True,
                "throttle_limit": 4,
                "batch_size": 1000,
            }
        }


class ScanSummary(BaseModel):
    """Summary of scan results"""

    entries_scanned: int = Field(default=0)
    violations_total: int = Field(default=0)
    longest: Optional[int] = Field(default=None)
    skipped_locations: int = Field(default=0)


class ScanResponse(BaseModel):
    """Response from a scan operation"""

    status: str = Field(..., description="Scan status: complete or failed")
    summary: ScanSummary
    result: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        json_schema_extra = {
            "example": {
                "status": "complete",
                "summary": {
                    "entries_scanned": 120000,
                    "violations_total": 7,
                    "longest": 301,
                    "skipped_locations": 0,
                },
                "result": {},
            }
        }
