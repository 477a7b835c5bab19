"""sbtprobe - resolve released versions of sbt plugins.

    Returns:
        int: Exit code
"""
import sys
import logging
import json
import os

import yaml

from constants import ExitCodes, Constants
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import ConfigError, apply_config_overrides
from common.http_client import HttpClient
from registry.sbt_plugin import InvalidPackageNameError, get_releases
from versioning import UnknownVersioningError


def load_pkgs_file(file_name):
    """Loads plugin coordinates from a file.

    Blank lines and lines starting with '#' are skipped.

    Args:
        file_name (str): File path containing the list of plugins.

    Returns:
        list: List of plugin coordinates
    """
    try:
        with open(file_name, encoding='utf-8') as file:
            lines = [line.strip() for line in file]
    except FileNotFoundError as e:
        logging.error("File not found: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except IOError as e:
        logging.error("IO error: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    return [line for line in lines if line and not line.startswith("#")]


def build_pkglist(args):
    """Collect plugin coordinates from -p flags or a list file."""
    if getattr(args, "LIST_FROM_FILE", None):
        return load_pkgs_file(args.LIST_FROM_FILE)
    return [p.strip() for p in (args.SINGLE or []) if p and p.strip()]


def export_json(entries, path):
    """Exports the resolution results to a JSON file.

    Args:
        entries (list): List of dicts with packageName and result.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(entries, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def resolve_all(pkglist, registry_urls, versioning, max_workers=None):
    """Resolve every coordinate, sharing one HTTP client.

    Returns:
        list: ``{"packageName": ..., "result": dict or None}`` per coordinate.
    """
    entries = []
    with HttpClient() as http:
        for pkg in pkglist:
            result = get_releases(
                pkg,
                registry_urls,
                versioning=versioning,
                http=http,
                max_workers=max_workers,
            )
            entries.append({
                "packageName": pkg,
                "result": result.to_dict() if result is not None else None,
            })
    return entries


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging(getattr(args, "LOG_FILE", None))

    try:
        apply_config_overrides(args)
    except FileNotFoundError as e:
        logging.error("Config file not found: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except (ConfigError, yaml.YAMLError) as e:
        logging.error("Invalid configuration: %s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    pkglist = build_pkglist(args)
    if not pkglist:
        logging.warning("No plugins found in the input list.")
        sys.exit(ExitCodes.SUCCESS.value)
    logging.info("Plugin list imported: %s", str(pkglist))

    registry_urls = args.REGISTRY_URLS or Constants.DEFAULT_REGISTRY_URLS
    try:
        entries = resolve_all(pkglist, registry_urls, Constants.DEFAULT_VERSIONING)
    except (InvalidPackageNameError, UnknownVersioningError) as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    if getattr(args, "OUTPUT", None):
        export_json(entries, args.OUTPUT)
    else:
        for entry in entries:
            print(json.dumps(entry["result"], indent=2))

    missing = [entry["packageName"] for entry in entries if entry["result"] is None]
    if missing:
        logging.warning("No releases found for: %s", ", ".join(missing))
        if args.ERROR_ON_MISSING:
            logging.error("Missing releases, exiting with non-zero status code.")
            sys.exit(ExitCodes.EXIT_MISSING.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
