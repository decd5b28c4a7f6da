"""Run the command line interface: python -m component_registry_mcp."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
