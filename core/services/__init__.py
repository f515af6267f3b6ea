"""Services for the core app."""

from core.services.health_service import HealthService, health_service

# Dispatcher and preference services import models; import them directly
# from their modules to keep app loading free of model imports.

__all__ = [
    "HealthService",
    "health_service",
]
