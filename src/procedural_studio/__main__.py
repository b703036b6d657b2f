"""
Entry point for running Procedural Studio as a module.

Usage:
    python -m procedural_studio
"""

import sys

from procedural_studio.main import main

if __name__ == "__main__":
    sys.exit(main())
