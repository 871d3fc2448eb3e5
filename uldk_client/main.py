"""
ULDK Lookup - FastAPI Entry Point
Administrative units and cadastral geometry from GUGiK ULDK, in WGS-84.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime
import logging

from uldk_client.config import Settings
from uldk_client.data.mocks import demo_transport
from uldk_client.routes.administrative import router as administrative_router
from uldk_client.routes.geometry import router as geometry_router
from uldk_client.services.lookup import UldkLookup
from uldk_client.services.uldk import UldkClient

log = logging.getLogger(__name__)


def build_lookup(settings: Settings) -> UldkLookup:
    client = UldkClient(
        base_url=settings.base_url,
        timeout=settings.timeout,
        transport=demo_transport() if settings.demo_mode else None,
    )
    return UldkLookup(client, initial=settings.initial)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log.info("Starting ULDK lookup against %s (demo_mode=%s)", settings.base_url, settings.demo_mode)

    lookup = build_lookup(settings)
    await lookup.start()
    app.state.settings = settings
    app.state.lookup = lookup

    yield

    await lookup.aclose()


app = FastAPI(
    title="ULDK Lookup API",
    description="Voivodeships, districts, tenants, precincts and parcel geometry from GUGiK ULDK",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(administrative_router)
app.include_router(geometry_router)


@app.get("/")
async def root():
    """Health check endpoint."""
    settings = getattr(app.state, "settings", None)
    return {
        "status": "online",
        "service": "ULDK Lookup API",
        "version": "1.0.0",
        "demo_mode": settings.demo_mode if settings else False,
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    lookup = getattr(app.state, "lookup", None)
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "voivodeships_loaded": len(lookup.voivodeships) if lookup else 0,
        "last_error": lookup.error if lookup else None,
    }


# === Development Server ===
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "uldk_client.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
