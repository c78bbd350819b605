import logging
import sys
from argparse import ArgumentTypeError

from eventregistry.lib.args import parse_eventregistry_args, parse_log_level
from eventregistry.lib.events import EventRegistry
from eventregistry.lib.get_platform import get_platform
from eventregistry.lib.logger import configure_logger
from eventregistry.lib.preference_manager import PreferenceManager
from eventregistry.version import __version__

EXAMPLE_EVENTS = ("eventOne", "eventTwo", "eventThree", "eventFour")


def function_one():
    logging.info("functionOne called")


def function_two():
    logging.info("functionTwo called")


def function_three():
    logging.info("functionThree called")


def register_example_callbacks(registry: EventRegistry) -> EventRegistry:
    """Wire up the three example callbacks across the example events.

    eventFour is left without callbacks on purpose: emitting it does nothing.
    """
    registry.register("eventOne", function_one)
    registry.register("eventOne", function_two)
    registry.register("eventTwo", function_three)
    registry.register("eventThree", function_one)
    registry.register("eventThree", function_three)
    return registry


def run_example(registry: EventRegistry) -> None:
    for event_name in EXAMPLE_EVENTS:
        count = len(registry.handlers(event_name))
        logging.info(f"Emitting '{event_name}' ({count} callback(s))")
        registry.emit(event_name)


def main(argv=None) -> int:
    args = parse_eventregistry_args(argv)

    registry = EventRegistry()
    prefs = PreferenceManager(args.config_file_path, target=registry)
    try:
        settings = prefs.apply_all(log_level=args.log_level, error_policy=args.error_policy)
        log_level = parse_log_level(settings["log_level"])
    except (ValueError, ArgumentTypeError) as e:
        print(f"[ERROR] Invalid setting in {prefs.config_file_path}: {e}", file=sys.stderr)
        return 2

    log_file = configure_logger(
        log_level=log_level,
        log_dir=args.log_dir,
        max_log_files=args.max_log_files,
    )
    logging.debug(f"Logging to {log_file}")
    logging.info(f"eventregistry {__version__} on {get_platform()}")
    logging.info(f"Callback error policy: {registry.error_policy.value}")

    register_example_callbacks(registry)
    logging.debug(f"Registered events: {sorted(registry.snapshot())}")
    run_example(registry)
    return 0


if __name__ == "__main__":
    sys.exit(main())
