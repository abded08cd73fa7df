"""
Command-line interface for pyvalidation.

Exposes the click command group used by the ``pyvalidation`` console script.
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
