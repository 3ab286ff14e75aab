"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import admin, availability, bookings, users
from app.api.errors import register_error_handlers
from app.core.config import settings
from app.core.database import AsyncSessionLocal, engine, init_models
from app.services.master_data import seed_master_data

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Court Booking Service")
    logger.info(f"Debug mode: {settings.DEBUG}")

    await init_models()
    if settings.SEED_MASTER_DATA:
        async with AsyncSessionLocal() as db:
            await seed_master_data(db)

    yield

    # Shutdown
    logger.info("Shutting down Court Booking Service")
    await engine.dispose()


# Create FastAPI app
app = FastAPI(
    title="Court Booking Service",
    description="Book badminton courts by location, court, slot and date",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(availability.router)
app.include_router(bookings.router)
app.include_router(users.router)
app.include_router(admin.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
