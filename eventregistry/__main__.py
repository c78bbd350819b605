"""Entry point for running the event registry demo as a module.

This file allows the demo to be run with: python -m eventregistry
"""

import sys

from eventregistry.app import main

if __name__ == "__main__":
    sys.exit(main())
