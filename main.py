#!/usr/bin/env python3
"""
menufilter - filter menu titles with fuzzy or g/regex/ filters

This is a convenience wrapper for running from the repo root.
The actual entry point is menufilter.main:main (for pip install).
"""

from menufilter.main import main

if __name__ == "__main__":
    main()
