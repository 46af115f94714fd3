from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from core.cache import init_cache
from core.config import settings
from core.logging_config import setup_logging

# Feature routes
from features.stations.routes.station_routes import router as station_router
from features.stations.routes.favorite_routes import router as favorite_router

# Services
from features.stations.models.response_types import HealthResponse
from features.stations.services.catalog_service import StationCatalog
from features.stations.services.favorites_service import FavoritesService

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        logger.info("🚀 Starting Tide Station API...")

        await init_cache()

        catalog: Optional[StationCatalog] = getattr(app.state, "station_catalog", None)
        if catalog is None:
            catalog = StationCatalog()
            app.state.station_catalog = catalog

        # Materialize every record before serving so no request sees a partial catalog
        stations = catalog.stations()
        logger.info(f"📍 {len(stations)} stations available from {catalog.stations_file}")

        if getattr(app.state, "favorites_service", None) is None:
            app.state.favorites_service = FavoritesService(catalog=catalog)

        logger.info("✨ API startup complete - ready to serve requests")
        yield

    except Exception as e:
        logger.error(f"❌ Startup error: {str(e)}")
        raise
    finally:
        logger.info("👋 API shutdown complete")

app = FastAPI(
    title="Tide Station API",
    description="API for tide station metadata",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include feature routers
app.include_router(station_router)
app.include_router(favorite_router)

@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        time=datetime.now().isoformat(),
        stations=len(app.state.station_catalog.stations())
    )

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5010))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=settings.log_level.lower(),
        workers=1
    )
