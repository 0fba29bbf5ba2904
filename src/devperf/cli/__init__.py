"""
Command-line interface for the devperf package.

This module provides the main CLI entry point for the classifier.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
