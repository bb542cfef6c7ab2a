#!/usr/bin/env python3
"""Chronokit demo — entry point.

Run with:
    python main.py [seconds]
    python -m chronokit [seconds]
"""

import sys

from chronokit.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
