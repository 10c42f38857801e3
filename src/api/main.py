"""
FastAPI main application.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .routes import match, data, simulation

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Duel Simulator API",
    description="Real-time duel combat simulator: player vs scripted AI",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(match.router, prefix="/api/match", tags=["Match"])
app.include_router(data.router, prefix="/api/data", tags=["Data"])
app.include_router(simulation.router, prefix="/api/simulation", tags=["Simulation"])


@app.get("/")
async def root():
    """API status check."""
    return {
        "status": "ok",
        "name": "Duel Simulator API",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
