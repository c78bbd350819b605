import logging
import logging.handlers
import os
from datetime import datetime
from pathlib import Path

from eventregistry.lib.get_platform import get_data_directory, get_platform

# Records from the registry itself go through this logger (see lib/events.py)
REGISTRY_LOGGER = "eventregistry"

FILE_FORMAT = "[%(asctime)s] %(levelname)-8s %(message)s%(event_tag)s"
CONSOLE_FORMAT = "%(levelname)s %(message)s%(event_tag)s"


def get_log_directory() -> Path:
    """Get the log directory path based on the operating system

    Returns:
        Path: The path to the log directory

    Raises:
        OSError: If the operating system is unsupported
    """
    if get_platform() == "unknown":
        raise OSError("Unsupported OS. Can't determine logs folder.")

    return Path(get_data_directory()) / "logs"


def prune_logs(log_dir: Path, keep: int = 5) -> list[Path]:
    """Delete all but the `keep` most recently modified *.log files in log_dir.

    A missing directory is left alone. Returns the deleted paths.
    """
    if not log_dir.is_dir():
        return []

    log_files = sorted(log_dir.glob("*.log"), key=os.path.getmtime, reverse=True)
    stale = log_files[keep:]
    for path in stale:
        path.unlink()
    return stale


class EventTagFilter(logging.Filter):
    """Fill in `event_tag` so every format string can reference it.

    Registry records carry the event identifier in `record.event`; they get
    ` [event=<identifier>]` appended. Everything else gets an empty tag.
    """

    def filter(self, record):
        event = getattr(record, "event", None)
        record.event_tag = f" [event={event}]" if event is not None else ""
        return True


def configure_logger(
    log_level: int = logging.INFO,
    log_dir: Path | None = None,
    max_log_files: int = 5,
    registry_log_level: int | None = None,
) -> Path:
    """Send logs to the console and to a timestamped, rotating log file

    The console drops the date and time; the log file keeps them. Both tag
    records emitted by the registry with the event they concern.

    Args:
        log_level (int): Level for the root logger. Defaults to logging.INFO.
        log_dir (Path | None): Where to store the logs. Defaults to <data directory>/logs.
        max_log_files (int): Previous log files to keep. Defaults to 5.
        registry_log_level (int | None): Separate level for the registry's own records,
            e.g. DEBUG to trace register/emit while the rest stays at INFO.
            Defaults to log_level.

    Returns:
        Path: The log file that was opened.
    """
    if log_dir is None:
        log_dir = get_log_directory()

    prune_logs(log_dir, keep=max_log_files)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_filename = log_dir / datetime.now().strftime("%Y-%m-%d_%H-%M-%S.log")

    file_handler = logging.handlers.RotatingFileHandler(
        log_filename, maxBytes=10 * 1024**2, backupCount=5
    )
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%d.%m.%Y %H:%M:%S"))
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    tag_filter = EventTagFilter()
    for handler in (file_handler, stream_handler):
        handler.addFilter(tag_filter)

    logging.basicConfig(level=log_level, handlers=[file_handler, stream_handler], force=True)

    # Registry records propagate to the root handlers; only the threshold differs.
    registry_logger = logging.getLogger(REGISTRY_LOGGER)
    registry_logger.handlers.clear()
    registry_logger.propagate = True
    registry_logger.setLevel(log_level if registry_log_level is None else registry_log_level)

    return log_filename
