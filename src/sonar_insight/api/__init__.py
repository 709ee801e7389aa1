"""SonarCloud REST API client."""

from .client import DEFAULT_METRIC_KEYS, SonarCloudClient

__all__ = ["DEFAULT_METRIC_KEYS", "SonarCloudClient"]
