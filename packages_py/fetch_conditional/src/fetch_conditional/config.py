"""
Configuration for the conditional fetch client.

Loaded from a YAML file and validated with pydantic, e.g.::

    persistence_path: ./esi-cache.json
    timeout_seconds: 10
    default_expiry_rules:
      /latest/status/: 30000
      /latest/universe/: 86400000
"""
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CACHE_PATH_ENV_VAR = "CONDITIONAL_FETCH_CACHE_PATH"


class ConfigLoadError(Exception):
    """Raised when a configuration file cannot be parsed."""
    pass


class ConditionalFetchConfig(BaseModel):
    """Settings for the cache store and the default transport."""

    persistence_path: Optional[str] = None
    default_expiry_rules: Dict[str, int] = Field(default_factory=dict)
    cache_enabled: bool = True
    timeout_seconds: float = 30.0
    headers: Dict[str, str] = Field(default_factory=dict)

    @field_validator("default_expiry_rules")
    @classmethod
    def _non_negative_durations(cls, value: Dict[str, int]) -> Dict[str, int]:
        for pattern, duration in value.items():
            if duration < 0:
                raise ValueError(f"Expiry duration for {pattern!r} must not be negative")
        return value


def apply_env_overrides(config: ConditionalFetchConfig) -> ConditionalFetchConfig:
    """Return a copy with environment overrides applied."""
    cache_path = os.environ.get(CACHE_PATH_ENV_VAR)
    if cache_path:
        logger.debug(f"apply_env_overrides: persistence_path from {CACHE_PATH_ENV_VAR}={cache_path!r}")
        return config.model_copy(update={"persistence_path": cache_path})
    return config


def load_config(path: Union[str, Path]) -> ConditionalFetchConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated ConditionalFetchConfig with environment overrides applied

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigLoadError: If the file is not valid YAML or not a mapping
        pydantic.ValidationError: If values fail validation
    """
    file_path = Path(path)
    logger.debug(f"Parsing YAML file: {file_path}")
    content = file_path.read_text(encoding="utf-8")

    try:
        raw = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"YAML parsing error in {file_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigLoadError(f"Expected a mapping at the top of {file_path}")

    return apply_env_overrides(ConditionalFetchConfig.model_validate(raw))
