"""FastAPI REST API for slab optimisation.

Provides endpoints for optimising piece catalogues, validating jobs and
computing input fingerprints.

Usage:
    uvicorn slabcut.web:app --reload
"""

from slabcut.web.app import app, create_app

__all__ = ["app", "create_app"]
