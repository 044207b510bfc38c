"""CORS configuration for browser clients."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from taskdesk.config import ENVIRONMENT, FRONTEND_URL

logger = logging.getLogger(__name__)

# Base allowed origins for development
ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

if FRONTEND_URL and FRONTEND_URL not in ALLOWED_ORIGINS:
    ALLOWED_ORIGINS.append(FRONTEND_URL)


def allowed_origins() -> list[str]:
    """Origins accepted in the current environment."""
    if ENVIRONMENT == "production":
        return [FRONTEND_URL] if FRONTEND_URL else []
    return list(ALLOWED_ORIGINS)


def add_cors_middleware(app: FastAPI):
    """Add CORS middleware to the FastAPI application."""
    origins = allowed_origins()
    logger.info("CORS enabled for %s (%s)", origins, ENVIRONMENT)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
