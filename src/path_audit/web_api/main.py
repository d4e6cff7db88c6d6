"""
FastAPI Application
==================
HTTP front end for path length scans.

Run with:
    uvicorn path_audit.web_api.main:app --reload
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from path_audit import __version__
from path_audit.web_api.config import settings
from path_audit.web_api.routers import health, scan

# Create application
app = FastAPI(
    title="Path Audit API",
    description="Find files and folders whose full path is too long",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(scan.router, prefix="/scan", tags=["Scan"])


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Path Audit API",
        "version": __version__,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


# For running directly: python -m path_audit.web_api.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
