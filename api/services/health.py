"""
Health Check Service

Reports the health of the service's dependencies: the MongoDB deployment and
the messaging provider configuration.
"""

import time
from datetime import datetime, timezone
from typing import Dict, Any, List
from opentelemetry import trace

from config import Settings
from services.messaging import MessagingService
from services.mongodb import MongoDBService

tracer = trace.get_tracer(__name__)

SERVICE_NAME = "rescue-dispatch-api"


class HealthCheckService:
    """Service for dependency health monitoring."""

    def __init__(self, mongodb_service: MongoDBService, messaging_service: MessagingService, settings: Settings):
        self.mongodb_service = mongodb_service
        self.messaging_service = messaging_service
        self.settings = settings

    def get_health(self) -> Dict[str, Any]:
        """Get health status including all dependencies."""
        with tracer.start_as_current_span("health.check") as span:
            start_time = time.time()

            mongodb_health = self._check(self.mongodb_service.health_check)
            messaging_health = self._check(self.messaging_service.health_check)

            overall_status = self._determine_overall_status([
                mongodb_health["status"],
                messaging_health["status"]
            ])

            response_time_ms = round((time.time() - start_time) * 1000, 2)

            span.set_attributes({
                "health.overall_status": overall_status,
                "health.response_time_ms": response_time_ms,
                "health.mongodb_status": mongodb_health["status"],
                "health.messaging_status": messaging_health["status"]
            })

            return {
                "status": overall_status,
                "service": SERVICE_NAME,
                "version": self.settings.service_version,
                "environment": self.settings.environment,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "response_time_ms": response_time_ms,
                "dependencies": {
                    "mongodb": mongodb_health,
                    "messaging": messaging_health
                },
                "group_channel_configured": self.settings.group_configured
            }

    def _check(self, health_check) -> Dict[str, Any]:
        try:
            return health_check()
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}

    def _determine_overall_status(self, statuses: List[str]) -> str:
        """The database is required; any unhealthy dependency makes the service unhealthy."""
        if all(s == "healthy" for s in statuses):
            return "healthy"
        return "unhealthy"
