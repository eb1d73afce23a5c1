"""SITE-ATLAS - Location assessment map service.

Main FastAPI application.
"""

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.config import settings
from app.routers.analytics import router as analytics_router
from app.routers.layers import router as layers_router
from app.routers.map import router as map_router
from atlas.context import load_site
from atlas.dataset import DatasetLoadError


def configure_logging(level: str = settings.log_level) -> None:
    """Route loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), backtrace=settings.debug)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the site dataset once; on failure serve nothing but 503s."""
    logger.info("=" * 60)
    logger.info(f"  {settings.app_name} - INITIALIZING")
    logger.info("=" * 60)

    app.state.site = None
    try:
        site = await load_site(
            settings.dataset_source,
            hidden_on_load=settings.hidden_layers,
            timeout=settings.fetch_timeout,
        )
    except DatasetLoadError as e:
        logger.error(f"Site dataset unavailable, no layers built: {e}")
    else:
        app.state.site = site
        logger.info(
            f"Site '{site.dataset.subject.name}' ready: "
            f"layers={site.registry.names()}, "
            f"avg competitor footfall={site.summary.avg_competitor_footfall}, "
            f"excluded entities={len(site.rejected)}"
        )

    yield

    logger.info(f"{settings.app_name} shutting down...")


configure_logging()

# Create FastAPI app
app = FastAPI(
    title="SITE-ATLAS",
    description="Location assessment - site map layers and competitor analytics",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(map_router)
app.include_router(layers_router)
app.include_router(analytics_router)


@app.get("/health")
async def health():
    """Liveness plus whether the site dataset loaded."""
    return {"status": "ok", "loaded": getattr(app.state, "site", None) is not None}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
