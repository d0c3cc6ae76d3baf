#!/usr/bin/env python3
"""Entry point for `python -m xliffconv`."""

from .cli import main

if __name__ == "__main__":
    main()
