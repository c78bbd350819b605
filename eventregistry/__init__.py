from eventregistry.lib.events import ErrorPolicy, EventRegistry
from eventregistry.lib.get_platform import get_platform
from eventregistry.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    ErrorPolicy.__name__,
    EventRegistry.__name__,
    get_platform.__name__,
]
