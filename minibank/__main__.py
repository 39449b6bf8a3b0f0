#!/usr/bin/env python3
"""Main entry point for the interactive mini bank shell"""

from .shell import main

if __name__ == "__main__":
    main()
