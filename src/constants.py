"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    EXIT_MISSING = 3
    CONFIG_ERROR = 4


class VersioningSchemes(Enum):
    """Versioning schemes that can order release labels.

    Args:
        Enum (string): Scheme identifiers accepted on the command line.
    """

    MAVEN = "maven"
    PEP440 = "pep440"
    SEMVER = "semver"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_MAVEN = "https://repo.maven.apache.org/maven2"
    REGISTRY_URL_SBT_PLUGINS = "https://repo.scala-sbt.org/scalasbt/sbt-plugin-releases"
    DEFAULT_REGISTRY_URLS = [REGISTRY_URL_MAVEN]
    SUPPORTED_VERSIONING = [
        VersioningSchemes.MAVEN.value,
        VersioningSchemes.PEP440.value,
        VersioningSchemes.SEMVER.value,
    ]
    DEFAULT_VERSIONING = VersioningSchemes.MAVEN.value
    HOST_TYPE = "sbt"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    USER_AGENT = "sbtprobe/0.1"
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    PROBE_MAX_CONCURRENCY = 8
    POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
    ENV_CONFIG = "SBTPROBE_CONFIG"
    ENV_LOG_LEVEL = "SBTPROBE_LOG_LEVEL"
    DEFAULT_CONFIG_PATHS = [
        os.path.join("~", ".config", "sbtprobe", "sbtprobe.yml"),
        "sbtprobe.yml",
    ]


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the YAML configuration file, returning an empty mapping if absent.

    Lookup order: explicit path, $SBTPROBE_CONFIG, then DEFAULT_CONFIG_PATHS.
    Only an explicit path that cannot be read is reported as an error.
    """
    candidates = []
    if path:
        candidates.append(path)
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        candidates.append(env_path)
    candidates.extend(Constants.DEFAULT_CONFIG_PATHS)

    for candidate in candidates:
        expanded = os.path.expanduser(candidate)
        if not os.path.isfile(expanded):
            if candidate == path:
                raise FileNotFoundError(expanded)
            continue
        with open(expanded, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            logging.getLogger(__name__).warning("Ignoring non-mapping config file: %s", expanded)
            return {}
        return data
    return {}
