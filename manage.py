#!/usr/bin/env python3
"""
Management script for running CLI commands
"""

import sys

from report_engine.interfaces.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
