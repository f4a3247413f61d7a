"""
Entry point for running unitcatalog as a module.

Usage:
    python -m unitcatalog convert 10 temperature:deg_c temperature:deg_f
    python -m unitcatalog lookup --alias Celsius
    python -m unitcatalog serve --port 8000
"""

import sys

from unitcatalog.cli.main import cli

if __name__ == "__main__":
    sys.exit(cli())
