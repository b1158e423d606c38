"""
Stale Package Versions Finder

A tool for finding stale package versions of a GitHub repository so they can be deleted.
"""

__version__ = "0.1.0"

from .cli import main

__all__ = ["main"]
