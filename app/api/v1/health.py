"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db.database import get_db
from app.db.repository import ProductRepository


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session):
        self._db = db

    def check_database(self) -> str:
        """Check database connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except SQLAlchemyError as e:
            logger.warning(f"⚠️ Database health check failed: {e}")
            return "unhealthy"

    def count_products(self) -> int:
        return ProductRepository(self._db).count()

    def get_health(self) -> dict:
        """Get full health status."""
        db_status = self.check_database()
        healthy = db_status == "healthy"

        return {
            "status": "healthy" if healthy else "degraded",
            "app": get_settings().app_name,
            "components": {
                "api": "healthy",
                "database": db_status
            },
            "details": {
                "products": self.count_products() if healthy else 0
            }
        }


@router.get("")
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns API and database status with the current product count.
    """
    controller = HealthController(db)
    return controller.get_health()


@router.get("/ready")
async def readiness_check(db: Session = Depends(get_db)):
    """Readiness probe: ready once the database answers."""
    controller = HealthController(db)
    return {"ready": controller.check_database() == "healthy"}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
