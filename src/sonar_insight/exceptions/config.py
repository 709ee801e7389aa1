"""Configuration and input exceptions: settings, credentials, required arguments."""

from typing import Any, Sequence

from .base import SonarInsightError


class ConfigurationError(SonarInsightError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class MissingTokenError(ConfigurationError):
    """Raised when an API call is attempted without a SonarCloud token."""

    def __init__(self, env_var: str = "SONAR_TOKEN"):
        super().__init__(
            f"No SonarCloud token configured. Set {env_var} in the environment or a .env file",
            details={"env_var": env_var},
            hint="Create a token under My Account > Security on SonarCloud",
        )
        self.env_var = env_var


class MissingInputError(ConfigurationError):
    """Raised when required command inputs were not supplied."""

    def __init__(self, names: Sequence[str]):
        joined = ", ".join(names)
        super().__init__(f"Missing required input: {joined}", details={"inputs": joined})
        self.names = list(names)
