"""
Pydantic Schemas
===============
Request and response models for the API.
"""
from .scan import ScanRequest, ScanResponse, ScanSummary

__all__ = ["ScanRequest", "ScanResponse", "ScanSummary"]
