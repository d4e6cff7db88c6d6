"""
Path Audit Web API
==================
FastAPI-based REST API for path length scans.

Quick Start:
    uvicorn path_audit.web_api.main:app --reload
"""
from .main import app

__all__ = ["app"]
