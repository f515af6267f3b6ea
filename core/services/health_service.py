"""Health check service with cached database probing."""

import time

from django.db import connection
from django.db.utils import OperationalError

import structlog

from core.enums import HealthStatus
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = structlog.get_logger(__name__)


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached health check results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._db_health_cache: DependencyHealth | None = None
        self._db_health_cache_time: float = 0.0

    def get_liveness_status(self) -> LivenessResponse:
        """Get liveness status (always returns alive).

        Returns:
            LivenessResponse with status "alive"
        """
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with a database health check.

        Returns degraded (ready=True, degraded=True) when the database is down
        so the process is kept while the connection recovers.

        Returns:
            ReadinessResponse with overall status and dependency health
        """
        db_health = self.check_database_health()

        if db_health.healthy:
            service_status = "ready"
            degraded = False
        else:
            service_status = "degraded"
            degraded = True

        return ReadinessResponse(
            ready=True,
            status=service_status,
            degraded=degraded,
            dependencies={"database": db_health},
        )

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity with caching.

        Uses Django's ensure_connection() for socket validation without
        executing queries. Results are cached for cache_ttl_seconds.

        Returns:
            DependencyHealth with database status
        """
        current_time = time.time()
        if (
            self._db_health_cache is not None
            and (current_time - self._db_health_cache_time) < self.cache_ttl_seconds
        ):
            return self._db_health_cache

        previous = self._db_health_cache
        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
            new_health = DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Database connection successful",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            if previous is not None and not previous.healthy:
                logger.info("database_connection_recovered")

        except OperationalError as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            if previous is None or previous.healthy:
                logger.warning("database_connection_lost", error=str(e))

        except Exception as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Unexpected error checking database: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            logger.error("database_health_check_error", error=str(e))

        self._db_health_cache = new_health
        self._db_health_cache_time = current_time

        return new_health

    def clear_cache(self) -> None:
        """Drop the cached database result so the next check probes again."""
        self._db_health_cache = None
        self._db_health_cache_time = 0.0


# Global health service instance
health_service = HealthService()
