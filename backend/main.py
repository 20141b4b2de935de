"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import portfolio
from config import settings
from logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Portfolio Valuation Replay",
    description="Reconstructs daily net worth and profit/loss from a transaction ledger",
    version="0.1.0",
)

# CORS configuration for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(portfolio.router)

logger.info(
    "Replay service ready (base currency %s, max %d days)",
    settings.BASE_CURRENCY,
    settings.MAX_REPLAY_DAYS,
)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
