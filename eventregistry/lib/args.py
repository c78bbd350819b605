import argparse
import logging
from pathlib import Path

from eventregistry.lib.events import ErrorPolicy

# Default values for CLI args
default_log_level = logging.INFO
default_config_file_path = "config.ini"
default_max_log_files = 5


def parse_log_level(level):
    """Accept either an int value (10, 20, ...) or a level name (debug, INFO, ...)."""
    if isinstance(level, bool):
        raise argparse.ArgumentTypeError(f"Invalid log level: {level}")
    if isinstance(level, int):
        return level
    level = str(level).strip()
    if level.lstrip("-").isdigit():
        return int(level)
    parsed = logging.getLevelName(level.upper())
    if not isinstance(parsed, int):
        raise argparse.ArgumentTypeError(f"Invalid log level: {level}")
    return parsed


def parse_eventregistry_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="eventregistry",
        description="Run the event registry demonstration scenario.",
    )

    parser.add_argument(
        "-l",
        "--log-level",
        help=f"Logging level int value or name (DEBUG: 10, INFO: 20, WARNING: 30, ERROR: 40, CRITICAL: 50). (default: {default_log_level} )",
        default=None,
        type=parse_log_level,
        required=False,
    )
    parser.add_argument(
        "--error-policy",
        help="What to do when a callback raises: isolate (log and keep going) or propagate. (default: %s)"
        % ErrorPolicy.ISOLATE.value,
        choices=[policy.value for policy in ErrorPolicy],
        default=None,
        required=False,
    )
    parser.add_argument(
        "-c",
        "--config-file-path",
        help=f"Path to a config file to load settings from. Relative paths are resolved against the data directory. (default: {default_config_file_path})",
        default=default_config_file_path,
        required=False,
    )
    parser.add_argument(
        "--log-dir",
        help="Directory to write log files to. (default: <data directory>/logs)",
        default=None,
        type=Path,
        required=False,
    )
    parser.add_argument(
        "--max-log-files",
        help=f"Number of previous log files to keep. (default: {default_max_log_files})",
        default=default_max_log_files,
        type=int,
        required=False,
    )

    return parser.parse_args(argv)
