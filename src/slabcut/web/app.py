"""FastAPI application factory."""

from collections.abc import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from slabcut.web.exceptions import register_exception_handlers
from slabcut.web.routers import optimize_router, validate_router

API_PREFIX = "/api/v1"


def create_app(cors_origins: Sequence[str] = ("*",)) -> FastAPI:
    """Build the slab optimisation API.

    Args:
        cors_origins: Origins allowed to call the API from a browser.

    Returns:
        FastAPI app with the optimise and validate routers under /api/v1.
    """
    app = FastAPI(
        title="Slab Optimiser API",
        description="Lay out stone benchtop pieces on slabs, with oversize "
        "joins and lamination strips",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in (optimize_router, validate_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()
