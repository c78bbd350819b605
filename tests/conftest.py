"""Pytest fixtures for eventregistry tests."""

import logging

import pytest

from eventregistry.lib.events import EventRegistry
from eventregistry.lib.logger import REGISTRY_LOGGER
from eventregistry.lib.preference_manager import PreferenceManager


class CallRecorder:
    """Hands out named callbacks and records the order they are invoked in."""

    def __init__(self):
        self.calls: list[str] = []
        self.arguments: list[tuple] = []
        self._callbacks = {}

    def callback(self, name: str):
        """Return the same callable every time for a given name."""
        if name not in self._callbacks:

            def record(*args, **kwargs):
                self.calls.append(name)
                self.arguments.append((args, kwargs))

            record.__qualname__ = name
            self._callbacks[name] = record
        return self._callbacks[name]

    def failing(self, name: str, exc: Exception | None = None):
        """Return a callable that records its call and then raises."""
        error = exc or RuntimeError(f"{name} failed")

        def fail(*args, **kwargs):
            self.calls.append(name)
            raise error

        fail.__qualname__ = name
        return fail


@pytest.fixture
def registry():
    return EventRegistry()


@pytest.fixture
def recorder():
    return CallRecorder()


@pytest.fixture
def prefs(tmp_path):
    """PreferenceManager backed by a throwaway config file, synced to a fresh registry."""
    return PreferenceManager(config_file_path=str(tmp_path / "config.ini"), target=EventRegistry())


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by configure_logger."""
    loggers = [logging.getLogger(), logging.getLogger(REGISTRY_LOGGER)]
    saved = {logger: (logger.handlers[:], logger.level) for logger in loggers}
    yield
    for logger, (handlers, level) in saved.items():
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)
