"""FastAPI application for natural-language strategy building."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.env import load_environment
from src.routes import strategy

# Load environment variables
load_environment()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    logger.info("Starting Strategy Builder Service...")
    logger.info(f"Server running on port {os.getenv('PORT', '8080')}")
    logger.info(f"OPENAI_API_URL: {os.getenv('OPENAI_API_URL', 'default')}")
    if not os.getenv("OPENAI_API_KEY"):
        logger.warning("OPENAI_API_KEY is not set; /strategies/build will fail")
    logger.info("Ready for requests")
    yield
    # Shutdown
    logger.info("Shutting down Strategy Builder Service...")


# Create FastAPI app
app = FastAPI(
    title="Strategy Builder",
    description="Natural language to trading signal compilation service",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(strategy.router)
app.include_router(strategy.catalog_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
