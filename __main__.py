#!/usr/bin/env python3
"""
Day Timeline - Main entry point.
"""

import sys

from cli.main import main

if __name__ == "__main__":
    sys.exit(main())
