"""Argument parsing functionality for sbtprobe."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="sbtprobe",
        description=(
            "sbtprobe - Resolve released versions of sbt plugins from Maven-style repositories"
        ),
        add_help=True,
    )

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("-p", "--package",
                             dest="SINGLE",
                             help="Plugin coordinate, i.e: org.foundweekends:sbt-bintray",
                             action="append", type=str)
    input_group.add_argument("-l", "--load_list",
                             dest="LIST_FROM_FILE",
                             help="Load plugin coordinates from a file, one per line",
                             action="store", type=str)

    parser.add_argument("-r", "--registry",
                        dest="REGISTRY_URLS",
                        help="Repository base URL; repeat to try several in order",
                        action="append", type=str,
                        default=[])
    parser.add_argument("--versioning",
                        dest="VERSIONING",
                        help="Versioning scheme used to validate and sort versions (default: maven)",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_VERSIONING)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Write results as a JSON array to this path",
                        action="store",
                        type=str)
    parser.add_argument("--config",
                        dest="CONFIG",
                        help="Path to a YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--timeout",
                        dest="REQUEST_TIMEOUT",
                        help="HTTP request timeout in seconds",
                        action="store",
                        type=int)
    parser.add_argument("--max-concurrency",
                        dest="MAX_CONCURRENCY",
                        help="Maximum concurrent directory probes per registry",
                        action="store",
                        type=int)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-missing",
                        dest="ERROR_ON_MISSING",
                        help="Exit with a non-zero status code if a plugin has no releases.",
                        action="store_true")

    return parser.parse_args(argv)
