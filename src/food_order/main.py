"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from food_order.api.otp import router as otp_router
from food_order.config import settings
from food_order.database.engine import dispose_db, init_db

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle hook."""
    logger.info("Starting %s …", settings.app_name)
    await init_db()
    logger.info("Database initialised")
    yield
    logger.info("Shutting down %s …", settings.app_name)
    await dispose_db()


app = FastAPI(
    title=settings.app_name,
    description="Food-ordering storefront backend: account password reset",
    version="0.1.0",
    lifespan=lifespan,
)

# Browser storefront calls the API from its own origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(otp_router)


@app.get("/health")
async def health_check():
    """Simple liveness probe."""
    return {"status": "healthy", "app": settings.app_name}


def run() -> None:
    """Serve the app with uvicorn (``food-order-api`` console script)."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")
