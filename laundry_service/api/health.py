"""
Health check endpoint
"""
from datetime import datetime, timezone

import pika
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from laundry_service import __version__
from laundry_service.config import settings
from laundry_service.database import get_db

router = APIRouter(tags=["health"])


def _rabbitmq_status() -> str:
    if not settings.EVENTS_ENABLED:
        return "disabled"
    try:
        params = pika.URLParameters(settings.RABBITMQ_URL)
        params.socket_timeout = 2
        connection = pika.BlockingConnection(params)
        connection.close()
        return "healthy"
    except Exception as e:
        return f"unhealthy: {str(e)}"


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint
    
    Checks:
    - Service status
    - Database connectivity
    - RabbitMQ connectivity (when events are enabled)
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
    
    rabbitmq_status = _rabbitmq_status()
    
    overall_status = "healthy" if (
        db_status == "healthy" and rabbitmq_status in ("healthy", "disabled")
    ) else "unhealthy"
    
    return {
        "service": settings.SERVICE_NAME,
        "status": overall_status,
        "database": db_status,
        "rabbitmq": rabbitmq_status,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/")
def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": __version__,
        "docs": "/docs"
    }
