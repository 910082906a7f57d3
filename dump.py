#!/usr/bin/python3

"""
Entry point script for hexview.
"""

import sys

from src.hexview.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
