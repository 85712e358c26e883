"""Domain models used across application layer boundaries."""

from .models import AppMetadata, HealthStatus

__all__ = ["AppMetadata", "HealthStatus"]
