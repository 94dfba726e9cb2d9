"""
FastAPI Application Entry Point - Laundry Service
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from laundry_service import __version__
from laundry_service.config import settings
from laundry_service.database import init_db
from laundry_service.exceptions import LaundryError, laundry_error_handler
from laundry_service.logging_config import configure_logging
from laundry_service.api import admin, auth, catalog, functions, health, orders

configure_logging()
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Laundry Service",
    description="Campus laundry ordering, batch processing and pickup tracking",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(LaundryError, laundry_error_handler)

# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(catalog.router)
app.include_router(orders.router)
app.include_router(admin.router)
app.include_router(functions.router)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.on_event("startup")
def startup_event():
    """Initialize database on startup"""
    logger.info("Starting %s...", settings.SERVICE_NAME)
    init_db()
    logger.info("✓ Database initialized")
    logger.info("✓ Order webhook: %s", settings.ORDER_WEBHOOK_URL)
    logger.info("✓ Events %s (%s)", "enabled" if settings.EVENTS_ENABLED else "disabled", settings.RABBITMQ_URL)
    logger.info("✓ %s is running on port %s", settings.SERVICE_NAME, settings.SERVICE_PORT)


@app.on_event("shutdown")
def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down %s...", settings.SERVICE_NAME)
