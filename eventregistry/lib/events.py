"""Event registry for decoupling emitters from the callbacks that react to them."""

from __future__ import annotations

import enum
import logging
import threading
from typing import Any, Callable, Hashable

logger = logging.getLogger(__name__)


class ErrorPolicy(enum.Enum):
    """What emit() does when a callback raises."""

    ISOLATE = "isolate"
    PROPAGATE = "propagate"

    @classmethod
    def parse(cls, value: ErrorPolicy | str) -> ErrorPolicy:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown error policy: {value!r} (expected one of: {choices})")


class EventRegistry:
    """Maps event identifiers to ordered, duplicate-free lists of callbacks.

    Callbacks run synchronously on the emitting thread, in registration order.
    With ErrorPolicy.ISOLATE a failing callback is logged and the remaining ones
    still run; with ErrorPolicy.PROPAGATE the exception reaches the emitter.
    """

    def __init__(self, error_policy: ErrorPolicy | str = ErrorPolicy.ISOLATE) -> None:
        self._handlers: dict[Hashable, list[Callable]] = {}
        self._lock = threading.RLock()
        self.error_policy = error_policy

    @property
    def error_policy(self) -> ErrorPolicy:
        return self._error_policy

    @error_policy.setter
    def error_policy(self, value: ErrorPolicy | str) -> None:
        self._error_policy = ErrorPolicy.parse(value)

    def register(self, identifier: Hashable, callback: Callable) -> None:
        """Register a callback for an event. Registering the same pair twice is a no-op."""
        if not callable(callback):
            raise TypeError(f"Callback for '{identifier}' is not callable: {callback!r}")
        with self._lock:
            callbacks = self._handlers.setdefault(identifier, [])
            if callback in callbacks:
                return
            callbacks.append(callback)
        logger.debug(f"Registered {_describe(callback)}", extra={"event": identifier})

    on = register

    def unregister(self, identifier: Hashable, callback: Callable) -> bool:
        """Remove a callback from an event. Returns True if it was registered."""
        with self._lock:
            callbacks = self._handlers.get(identifier)
            if not callbacks or callback not in callbacks:
                return False
            callbacks.remove(callback)
            if not callbacks:
                del self._handlers[identifier]
        logger.debug(f"Unregistered {_describe(callback)}", extra={"event": identifier})
        return True

    off = unregister

    def clear(self, identifier: Hashable | None = None) -> None:
        """Drop the callbacks of one event, or of every event when none is given."""
        with self._lock:
            if identifier is None:
                self._handlers.clear()
            else:
                self._handlers.pop(identifier, None)

    def emit(self, identifier: Hashable, *args: Any, **kwargs: Any) -> None:
        """Call every callback registered for this event, forwarding the arguments."""
        # Callbacks run outside the lock so they may register, unregister or emit.
        # Changes made while emitting apply from the next emission on.
        with self._lock:
            callbacks = tuple(self._handlers.get(identifier, ()))
        if not callbacks:
            logger.debug("No callbacks registered", extra={"event": identifier})
            return

        for callback in callbacks:
            try:
                callback(*args, **kwargs)
            except Exception:
                if self._error_policy is ErrorPolicy.PROPAGATE:
                    raise
                logger.exception(
                    f"Callback {_describe(callback)} failed", extra={"event": identifier}
                )

    def handlers(self, identifier: Hashable) -> tuple[Callable, ...]:
        """Return the callbacks registered for an event, in invocation order."""
        with self._lock:
            return tuple(self._handlers.get(identifier, ()))

    def snapshot(self) -> dict[Hashable, tuple[Callable, ...]]:
        """Return a copy of the whole identifier -> callbacks mapping."""
        with self._lock:
            return {identifier: tuple(cbs) for identifier, cbs in self._handlers.items()}

    def __contains__(self, identifier: Hashable) -> bool:
        with self._lock:
            return identifier in self._handlers

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)


def _describe(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)
