"""
CLI entry point for pyvalidation.

This module serves as the entry point when pyvalidation.cli is executed as a
module with `python -m pyvalidation.cli`.
"""

from .main import main

if __name__ == "__main__":
    main()
