from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import estimates

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("takeoff")

app = FastAPI(
    title=settings.APP_NAME,
    description="Quantity takeoff and stock-cut estimates for contractor trades",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(estimates.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "takeoff-estimator"}


@app.on_event("startup")
def warm_catalog():
    """Load the material catalog (and any price overrides) once at startup."""
    from .calculators.material_lookup import default_catalog
    catalog = default_catalog()
    logger.info("Catalog ready: %d materials", len(catalog))
