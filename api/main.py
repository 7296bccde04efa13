# Main FastAPI application file
# File: api/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from typing import Dict

from api.endpoints.openings import router as openings_router
from api.utils.auth import auth_dependency
from api.utils.config import Config
from api.utils.errors import APIError, api_error_handler

# Set up logging
logger = logging.getLogger("wall_openings.api")
logger.setLevel(logging.DEBUG if Config.DEBUG else logging.INFO)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    logger.addHandler(handler)

# Define lifespan context manager (replaces on_event)
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Run on application startup.")
    Config.validate()
    yield
    logger.info("Application shutting down.")

app = FastAPI(
    title="Wall Opening Planning API",
    description="""
    # Wall Opening Planning API

    Plans rectangular openings where ducts pass through walls.

    ## Features

    - Duct/wall crossing detection over straight box walls
    - One opening per wall crossed, sized to the duct diameter
    - Skip report for degenerate ducts and walls without a level

    ## Authentication

    Planning endpoints require an API key in the `X-API-Key` header.

    ## Workflow

    1. Export ducts (centerline, diameter) and walls (location line,
       thickness, height, level) from the models
    2. Submit them with `POST /openings/plan`
    3. Place the returned openings in the modeling application
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Openings",
            "description": "Opening planning for duct/wall crossings"
        },
        {
            "name": "Status",
            "description": "API status and health check endpoints"
        }
    ],
    lifespan=lifespan,
)

# Root endpoint
@app.get("/", tags=["Status"])
async def root():
    return {"status": "online", "message": "Wall Opening Planning API is running"}

# Health check endpoint (general API health)
@app.get("/health", tags=["Status"], response_model=Dict[str, str])
async def health_check():
    """Check if the API service is healthy."""
    logger.info("Health check requested")
    return {"status": "healthy", "message": "Wall Opening Planning API is running"}

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with dependencies
app.include_router(
    openings_router,
    prefix="/openings",
    tags=["Openings"],
    dependencies=[auth_dependency()]
)
logger.info("Included openings router with prefix /openings")

# Request-level failures (e.g. rejected config overrides)
app.add_exception_handler(APIError, api_error_handler)

# Run with: uvicorn api.main:app --reload
