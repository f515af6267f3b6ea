"""Liveness and readiness probe response schemas."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.health.dependency_health import DependencyHealth


class LivenessResponse(BaseSchemaModel):
    """Response model for liveness checks."""

    status: str = Field(..., description="Liveness status")


class ReadinessResponse(BaseSchemaModel):
    """Response model for readiness checks.

    A service whose database is down still reports ready=True with
    degraded=True so that it is not restarted while the database recovers.
    """

    ready: bool = Field(..., description="Service accepts requests")
    status: str = Field(..., description="Overall status: 'ready' or 'degraded'")
    degraded: bool = Field(..., description="Running with an unhealthy dependency")
    dependencies: dict[str, DependencyHealth] = Field(
        ..., description="Status of each dependency"
    )
