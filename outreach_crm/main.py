"""
Outreach CRM Backend - FastAPI Application
Main entry point with all routes configured.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from outreach_crm import __version__
from outreach_crm.config import settings
from outreach_crm.database import init_db
from outreach_crm.core.exceptions import OutreachCRMError
from outreach_crm.core.logging_config import configure_logging
from outreach_crm.schemas.common import HealthResponse

from outreach_crm.api import auth, leads, campaigns, templates, messages, drafts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    configure_logging(settings.LOG_LEVEL)
    await init_db()
    logger.info("Outreach CRM API started")
    yield


app = FastAPI(
    title="Outreach CRM API",
    description="Leads, campaigns, templates and AI-drafted outreach messages",
    version=__version__,
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OutreachCRMError)
async def outreach_crm_error_handler(request: Request, exc: OutreachCRMError):
    """Map domain errors to their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(auth.router)
app.include_router(leads.router)
app.include_router(campaigns.router)
app.include_router(templates.router)
app.include_router(messages.router)
app.include_router(drafts.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "message": "Outreach CRM API is running",
        "version": __version__,
        "docs": "/docs"
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Detailed health check."""
    return HealthResponse(status="healthy", version=__version__)
