"""
Health Check Service

Reports MongoDB reachability and process uptime.
"""

import os
import time
import logging
import psutil
from datetime import datetime
from typing import Dict, Any, Optional
from opentelemetry import trace

from .mongodb import MongoDBService

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

SERVICE_NAME = "seva-mitra-api"
SERVICE_VERSION = "1.0.0"


class HealthCheckService:
    """Service for dependency health monitoring."""

    def __init__(self, mongodb_service: MongoDBService, environment: str = None):
        self.mongodb_service = mongodb_service
        self.environment = environment or os.getenv('ENVIRONMENT', 'development')
        self.service_version = SERVICE_VERSION

    def get_health(self) -> Dict[str, Any]:
        """Get overall health status with dependency details."""
        with tracer.start_as_current_span("health.check") as span:
            start_time = time.time()

            mongodb_health = self._check_mongodb_health()
            overall_status = "healthy" if mongodb_health["status"] == "healthy" else "unhealthy"

            response_time_ms = round((time.time() - start_time) * 1000, 2)

            health_data = {
                "status": overall_status,
                "service": SERVICE_NAME,
                "version": self.service_version,
                "environment": self.environment,
                "timestamp": datetime.utcnow().isoformat() + "Z",
                "response_time_ms": response_time_ms,
                "uptime_seconds": self._get_uptime_seconds(),
                "dependencies": {
                    "mongodb": mongodb_health
                }
            }

            span.set_attributes({
                "health.overall_status": overall_status,
                "health.response_time_ms": response_time_ms,
                "health.mongodb_status": mongodb_health["status"]
            })

            return health_data

    def _check_mongodb_health(self) -> Dict[str, Any]:
        """Check MongoDB health with timing."""
        start_time = time.time()
        try:
            health = self.mongodb_service.health_check()
        except Exception as e:
            logger.error(f"MongoDB health check raised: {e}")
            health = {"status": "unhealthy", "error": str(e)}

        health["response_time_ms"] = round((time.time() - start_time) * 1000, 2)
        return health

    def _get_uptime_seconds(self) -> Optional[float]:
        """Seconds since this process started."""
        try:
            process = psutil.Process(os.getpid())
            return round(time.time() - process.create_time(), 2)
        except psutil.Error as e:
            logger.warning(f"Failed to get process uptime: {e}")
            return None
