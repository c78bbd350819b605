import os
import sys


def is_android():
    return os.path.exists("/system/app/") and os.path.exists("/system/priv-app")


def is_windows():
    return sys.platform.startswith("win")


def get_platform():
    if sys.platform == "darwin":
        return "osx"
    elif is_android():
        return "android"
    elif sys.platform.startswith("linux"):
        return "linux"
    elif is_windows():
        return "windows"
    else:
        return "unknown"


def get_data_directory():
    """
    Returns the writable data directory holding config.ini and logs.
    Windows: %APPDATA%/eventregistry
    Linux/Mac: ~/.eventregistry
    """
    if is_windows():
        path = os.path.join(os.environ.get("APPDATA", os.path.expanduser("~")), "eventregistry")
    else:
        path = os.path.expanduser("~/.eventregistry")

    if not os.path.exists(path):
        os.makedirs(path)

    return path
