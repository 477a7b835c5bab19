"""Configuration overrides for runtime tunables.

Precedence: CLI flags, then the ``sbt`` section of the YAML config, then the
defaults in Constants.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from constants import Constants, _load_yaml_config

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised for configuration values of the wrong shape."""


def _as_url_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError("sbt.registry_urls must be a string or a list of strings")


def _as_positive_int(name: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"sbt.{name} must be an integer") from None
    if number <= 0:
        raise ConfigError(f"sbt.{name} must be positive")
    return number


def apply_yaml_config(config: Dict[str, Any]) -> None:
    """Apply the ``sbt`` section of a parsed YAML document to Constants."""
    section = config.get("sbt") or {}
    if not isinstance(section, dict):
        raise ConfigError("'sbt' config section must be a mapping")
    if "registry_urls" in section:
        Constants.DEFAULT_REGISTRY_URLS = _as_url_list(section["registry_urls"])
    if "request_timeout" in section:
        Constants.REQUEST_TIMEOUT = _as_positive_int("request_timeout", section["request_timeout"])
    if "max_concurrency" in section:
        Constants.PROBE_MAX_CONCURRENCY = _as_positive_int("max_concurrency", section["max_concurrency"])
    if "versioning" in section:
        versioning = str(section["versioning"]).lower()
        if versioning not in Constants.SUPPORTED_VERSIONING:
            raise ConfigError(f"Unsupported sbt.versioning '{versioning}'")
        Constants.DEFAULT_VERSIONING = versioning


def apply_cli_overrides(args) -> None:
    """Apply CLI flags on top of whatever the YAML config set."""
    if getattr(args, "REQUEST_TIMEOUT", None) is not None:
        Constants.REQUEST_TIMEOUT = _as_positive_int("request_timeout", args.REQUEST_TIMEOUT)
    if getattr(args, "MAX_CONCURRENCY", None) is not None:
        Constants.PROBE_MAX_CONCURRENCY = _as_positive_int("max_concurrency", args.MAX_CONCURRENCY)
    if getattr(args, "VERSIONING", None):
        Constants.DEFAULT_VERSIONING = args.VERSIONING


def apply_config_overrides(args, config_path: Optional[str] = None) -> None:
    """Load YAML config (if any) and then apply CLI overrides.

    Raises:
        FileNotFoundError: an explicit config path does not exist.
        ConfigError: a config value has the wrong type.
    """
    config = _load_yaml_config(config_path or getattr(args, "CONFIG", None))
    if config:
        logger.debug("Loaded YAML configuration with sections: %s", ", ".join(sorted(config)))
        apply_yaml_config(config)
    apply_cli_overrides(args)
