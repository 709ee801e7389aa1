"""Configuration loading and management for Sonar Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in Settings)
    2. Global config (~/.sonar-insight.toml)
    3. Project config (./sonar-insight.toml)
    4. Explicit config file (--config)
    5. Environment variables (a .env file in the working directory is loaded first)
    6. CLI overrides (passed as kwargs)

Example:
    >>> settings = load_settings(output_dir="reports", verbose=True)
    >>> settings.verbosity
    'verbose'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from dotenv import load_dotenv

from .exceptions import ConfigurationError, InvalidConfigError, MissingTokenError

Verbosity = Literal["quiet", "normal", "verbose"]

OUTPUT_FORMATS = ("json", "csv", "text")

# Variable names shared with existing .env files; every other field
# is read from SONAR_INSIGHT_<FIELD>.
_ENV_ALIASES = {
    "token": "SONAR_TOKEN",
    "organization": "SONAR_ORGANIZATION",
    "host_url": "SONAR_HOST_URL",
    "project_key": "DEFAULT_PROJECT_KEY",
    "output_dir": "OUTPUT_DIR",
    "default_format": "DEFAULT_FORMAT",
}


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the SonarCloud client and artifact store.

    Attributes:
        SonarCloud access:
            token: API token, sent as the basic-auth user name
            organization: SonarCloud organization key
            host_url: Base URL of the SonarCloud instance
            project_key: Project used when a command gets no --project

        HTTP behaviour:
            timeout_seconds: Per-request timeout
            retries: Retry budget for idempotent requests (429/5xx)
            page_size: Issues requested per /issues/search page
            max_pages: Upper bound on issue pages followed

        Output:
            output_dir: Directory holding snapshots and rendered artifacts
            default_format: Format used when a command gets no --format
            verbosity: Logging verbosity level
    """

    token: Optional[str] = None
    organization: Optional[str] = None
    host_url: str = "https://sonarcloud.io"
    project_key: Optional[str] = None

    timeout_seconds: int = 30
    retries: int = 3
    page_size: int = 500
    max_pages: int = 20

    output_dir: str = "./output"
    default_format: str = "json"
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not self.host_url.startswith(("http://", "https://")):
            raise InvalidConfigError("host_url", self.host_url, "must start with http:// or https://")
        if self.timeout_seconds < 1:
            raise InvalidConfigError("timeout_seconds", self.timeout_seconds, "must be at least 1")
        if self.retries < 0:
            raise InvalidConfigError("retries", self.retries, "must be non-negative")
        # SonarCloud caps ps at 500 for /issues/search
        if not 1 <= self.page_size <= 500:
            raise InvalidConfigError("page_size", self.page_size, "must be between 1 and 500")
        if self.max_pages < 1:
            raise InvalidConfigError("max_pages", self.max_pages, "must be at least 1")
        if self.default_format not in OUTPUT_FORMATS:
            raise InvalidConfigError(
                "default_format", self.default_format, f"must be one of {', '.join(OUTPUT_FORMATS)}"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "must be quiet, normal or verbose")

    @property
    def api_base(self) -> str:
        """Base URL of the REST API."""
        return f"{self.host_url.rstrip('/')}/api"

    def require_token(self) -> str:
        """Return the API token or raise MissingTokenError."""
        if not self.token:
            raise MissingTokenError(_ENV_ALIASES["token"])
        return self.token


def load_settings(config_file: Optional[Path] = None, **overrides: Any) -> Settings:
    """Load settings with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset options do not mask lower layers.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a merged value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".sonar-insight.toml"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / "sonar-insight.toml"
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    load_dotenv(Path.cwd() / ".env", override=False)
    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _read_config_file(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")
    # Allow both a flat file and a [sonar-insight] table
    section = data.get("sonar-insight")
    if isinstance(section, dict):
        return dict(section)
    return data


def env_var_for(field_name: str) -> str:
    """Return the environment variable that configures ``field_name``."""
    return _ENV_ALIASES.get(field_name, f"SONAR_INSIGHT_{field_name.upper()}")


def _load_env_vars() -> dict[str, Any]:
    """Load settings from environment variables.

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(Settings)

    result: dict[str, Any] = {}

    for field_name in Settings.__dataclass_fields__:
        env_key = env_var_for(field_name)
        env_value = os.environ.get(env_key)

        if env_value is None or env_value == "":
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
