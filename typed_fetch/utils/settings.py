"""
typed_fetch/utils/settings.py

WHAT THIS FILE IS FOR
---------------------
This module defines optional, file- and environment-driven configuration
for building an HttpClient via `HttpClient.from_settings()`.

It is responsible for:
- Defining all supported configuration fields (via Pydantic BaseSettings)
- Loading default values from a YAML parameters file
- Overriding defaults with environment variables (TYPED_FETCH_*)
- Validating the merged result
- Exposing a cached ClientSettings object

Constructing HttpClient directly with a ClientConfig does NOT go
through this module.

LOAD & PRECEDENCE MODEL
-----------------------
Configuration is loaded in the following order (last wins):

1) YAML defaults from:
       parameters/client.yaml   (or TYPED_FETCH_PARAMETERS_PATH)
2) Environment variables:
       TYPED_FETCH_*

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- HTTP calls
- Header merging
- Result handling
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from typed_fetch.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

PARAMETERS_PATH_ENV = "TYPED_FETCH_PARAMETERS_PATH"
DEFAULT_PARAMETERS_PATH = Path("parameters") / "client.yaml"


class ClientSettings(BaseSettings):
    """
    Settings used by HttpClient.from_settings().

    Load order / precedence:
        1) YAML defaults (parameters/client.yaml)
        2) Environment variables (TYPED_FETCH_*), overriding YAML
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPED_FETCH_",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Prefix joined verbatim with every endpoint
    base_url: Optional[str] = None

    default_headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Headers merged over the Content-Type default for every call.",
    )

    # None disables httpx timeouts
    timeout_seconds: Optional[float] = None


def _resolve_parameters_path(parameters_path: Optional[Path]) -> Path:
    if parameters_path is not None:
        return Path(parameters_path)
    from_env = os.getenv(PARAMETERS_PATH_ENV)
    return Path(from_env) if from_env else DEFAULT_PARAMETERS_PATH


def load_yaml_parameters(path: Path) -> Dict[str, Any]:
    """
    Load base configuration from a YAML file.

    A missing, unreadable, or non-mapping file yields {}.
    """
    if not path.exists():
        logger.info("parameters_yaml_missing", expected=str(path))
        return {}

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning(
                "parameters_yaml_not_dict",
                path=str(path),
                type=type(data).__name__,
            )
            return {}
        logger.info("parameters_yaml_loaded", path=str(path))
        return data
    except (OSError, yaml.YAMLError) as exc:
        logger.error("parameters_yaml_load_error", path=str(path), error=str(exc))
        return {}


@lru_cache(maxsize=8)
def get_settings(parameters_path: Optional[Path] = None) -> ClientSettings:
    """
    Construct and return the final validated ClientSettings object.

    Cached per parameters path; call get_settings.cache_clear() after
    changing the environment.

    Raises:
        ConfigurationError: merged values fail validation.
    """
    path = _resolve_parameters_path(parameters_path)

    # 1) YAML defaults
    yaml_data = load_yaml_parameters(path)

    # 2) env overrides (only fields actually set)
    try:
        env_data = ClientSettings().model_dump(exclude_unset=True)
    except ValidationError as exc:
        logger.error("settings_env_validation_error", errors=exc.errors())
        raise ConfigurationError(f"Invalid TYPED_FETCH_* environment settings: {exc}") from exc

    # 3) merge + validate
    merged: Dict[str, Any] = {**yaml_data, **env_data}
    try:
        settings = ClientSettings.model_validate(merged)
    except ValidationError as exc:
        logger.error("settings_validation_error", path=str(path), errors=exc.errors())
        raise ConfigurationError(f"Invalid client settings in {path}: {exc}") from exc

    if settings.timeout_seconds is not None and settings.timeout_seconds <= 0:
        raise ConfigurationError("timeout_seconds must be positive when set")

    logger.info(
        "settings_loaded",
        base_url=settings.base_url,
        header_names=sorted(settings.default_headers),
        timeout_seconds=settings.timeout_seconds,
    )
    return settings
